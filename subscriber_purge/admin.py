from django.contrib import admin

from .models import Comment, Option


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ('user', 'created_at')
    search_fields = ('user__username', 'user__email', 'body')
    list_select_related = ('user',)


@admin.register(Option)
class OptionAdmin(admin.ModelAdmin):
    list_display = ('name', 'autoload', 'updated_at')
    readonly_fields = ('updated_at',)
