from django.db import models
from django.conf import settings


class Option(models.Model):
    """A named configuration record stored as JSON."""
    name       = models.CharField(max_length=191, unique=True)
    value      = models.JSONField(null=True, blank=True)
    # hosts that preload options at startup must skip rows with autoload=False
    autoload   = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class Comment(models.Model):
    """Model for storing user comments. Any comment exempts a user from the purge."""
    user       = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='comments',
    )
    body       = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ('-created_at',)

    def __str__(self):
        return f"Comment by {self.user} on {self.created_at:%Y-%m-%d}"
