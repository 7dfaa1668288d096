from django.apps import AppConfig


class MailstoreConfig(AppConfig):
    name = 'app_mailstore'
    verbose_name = 'Mailbox metadata store'
