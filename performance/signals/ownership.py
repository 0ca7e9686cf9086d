# performance/signals/ownership.py
from django.db.models.signals import post_save
from django.dispatch import receiver
from guardian.shortcuts import assign_perm

from performance.models import AppraisalParticipant

# مَنح صلاحيات الكائن عند إنشاء المشارك:
# - مستخدم الموظف: التقييم الذاتي
# - مستخدم المقيِّم: تقييم المدير


@receiver(post_save, sender=AppraisalParticipant)
def grant_rating_perms_participant(sender, instance, created, **kwargs):
    if not created:
        return

    employee_user = getattr(instance.employee, "user", None)
    if employee_user:
        assign_perm("performance.view_appraisalparticipant", employee_user, instance)
        assign_perm("performance.self_rate_participant", employee_user, instance)

    evaluator = instance.evaluator
    evaluator_user = getattr(evaluator, "user", None) if evaluator else None
    if evaluator_user:
        assign_perm("performance.view_appraisalparticipant", evaluator_user, instance)
        assign_perm("performance.manager_rate_participant", evaluator_user, instance)
