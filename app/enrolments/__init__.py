"""
Enrolments - courses, enrolment methods and user enrolments.

This app is the host enrolment subsystem the payment callback writes into:
- Course: a course students can be enrolled in
- EnrolmentInstance: a configured enrolment method on a course
  (role granted, duration policy, enabled/disabled, price)
- UserEnrolment: a user's enrolment through one instance

Key components:
    - models.py: Course, EnrolmentInstance, UserEnrolment
    - services.py: EnrolmentService (lookups, enrol_user, teacher/admin lookups)
    - exceptions.py: Not-found errors for users, courses and instances

Usage:
    from enrolments.services import EnrolmentService

    instance = EnrolmentService.get_enrolment_instance(2, course, method="ipaymu")
    EnrolmentService.enrol_user(instance, user.id, instance.role, 0, 0)
"""
