from django.conf import settings
from django.contrib.auth.models import Group
from django.db.models.signals import post_save
from django.dispatch import receiver

@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def assign_default_role(sender, instance, created, **kwargs):
    if not created or kwargs.get('raw'):
        return

    # staff accounts are never purge candidates
    if instance.is_staff or instance.is_superuser:
        return

    role = getattr(settings, 'PURGE_TARGET_ROLE', 'subscriber') or 'subscriber'
    group, _ = Group.objects.get_or_create(name=role)
    instance.groups.add(group)
