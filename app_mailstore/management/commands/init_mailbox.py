"""
Django management command to provision a mailbox

Usage:
    python manage.py init_mailbox user@example.com
"""
from django.core.management.base import BaseCommand, CommandError

from app_mailstore.models.mailbox import Mailbox
from app_mailstore.services.mailstore_service import get_mailstore_service


class Command(BaseCommand):
    help = 'Provision a mailbox with the reserved labels'

    def add_arguments(self, parser):
        parser.add_argument('mailbox', help='Mailbox id')

    def handle(self, *args, **options):
        try:
            mailbox = Mailbox(options['mailbox'])
        except ValueError as e:
            raise CommandError(str(e)) from e

        service = get_mailstore_service()
        service.mailbox_store.init(mailbox)

        labels = service.label_store.list_all(mailbox)
        self.stdout.write(self.style.SUCCESS(f'Mailbox {mailbox} ready with {len(labels)} labels'))
