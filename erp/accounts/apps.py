from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Staff & Access'

    def ready(self):
        # Connect the auth / profile signal receivers
        from . import signals  # noqa: F401
