"""
Django management command to purge soft-deleted messages

Usage:
    python manage.py purge_messages user@example.com
    python manage.py purge_messages user@example.com --age-days 7
    python manage.py purge_messages user@example.com --all

Messages deleted more than --age-days ago (MAILSTORE_PURGE_AGE_DAYS by default)
lose their metadata row and payload.
"""
import logging
from datetime import datetime, timedelta

from django.core.management.base import BaseCommand, CommandError

from app_mailstore.models.mailbox import Mailbox
from app_mailstore.services.mailstore_service import get_mailstore_service

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Purge messages soft-deleted before the given age'

    def add_arguments(self, parser):
        parser.add_argument('mailbox', help='Mailbox id')
        parser.add_argument(
            '--age-days',
            type=int,
            default=None,
            help='Purge messages deleted at least this many days ago',
        )
        parser.add_argument(
            '--all',
            action='store_true',
            help='Purge every soft-deleted message regardless of age',
        )

    def handle(self, *args, **options):
        try:
            mailbox = Mailbox(options['mailbox'])
        except ValueError as e:
            raise CommandError(str(e)) from e

        service = get_mailstore_service()

        age = None
        if not options.get('all', False):
            age_days = options.get('age_days')
            if age_days is None:
                age_days = service.purge_age_days
            if age_days < 0:
                raise CommandError(f'--age-days must not be negative, got {age_days}')
            age = datetime.now() - timedelta(days=age_days)

        logger.info(f"[purge_messages] mailbox={mailbox}, age={age}")
        purged = service.message_store.purge(mailbox, age)
        self.stdout.write(self.style.SUCCESS(f'Purged {purged} messages from {mailbox}'))
