from datetime import timedelta

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.utils import timezone

from ..models import Comment

User = get_user_model()


def make_user(username, days_ago, comments=0, role='subscriber'):
    """
    Create a user registered ``days_ago`` days ago. New users land in the
    subscriber group through the post_save signal; any other ``role`` replaces it.
    """
    user = User.objects.create_user(
        username=username,
        email=f'{username}@example.com',
        password='Testpass@123',
        date_joined=timezone.now() - timedelta(days=days_ago),
    )
    if role != 'subscriber':
        user.groups.clear()
        group, _ = Group.objects.get_or_create(name=role)
        user.groups.add(group)

    for i in range(comments):
        Comment.objects.create(user=user, body=f'Comment {i} from {username}')
    return user
