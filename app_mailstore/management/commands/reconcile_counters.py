"""
Django management command to overwrite label counters with a snapshot

Usage:
    python manage.py reconcile_counters user@example.com --file counters.json

The snapshot maps label ids to counters, labels missing from it are zeroed:
    {"0": {"total_messages": 3, "unseen_messages": 1, "total_bytes": 2048}}
"""
import json

from django.core.management.base import BaseCommand, CommandError

from app_mailstore.models.label_counters import LabelCounters
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.services.mailstore_service import get_mailstore_service

COUNTER_FIELDS = ('total_messages', 'unseen_messages', 'total_bytes')


def parse_snapshot(raw: dict) -> dict:
    if not isinstance(raw, dict):
        raise ValueError('Snapshot must be a JSON object keyed by label id')

    snapshot = {}
    for label_id, values in raw.items():
        if not isinstance(values, dict):
            raise ValueError(f'Counters of label {label_id} must be a JSON object')
        unknown = set(values) - set(COUNTER_FIELDS)
        if unknown:
            raise ValueError(f'Unknown counter fields for label {label_id}: {sorted(unknown)}')
        snapshot[int(label_id)] = LabelCounters(**{name: int(values.get(name, 0)) for name in COUNTER_FIELDS})
    return snapshot


class Command(BaseCommand):
    help = 'Set label counters of a mailbox to the values of a JSON snapshot'

    def add_arguments(self, parser):
        parser.add_argument('mailbox', help='Mailbox id')
        parser.add_argument(
            '--file',
            required=True,
            help='Path of the JSON counters snapshot',
        )

    def handle(self, *args, **options):
        try:
            mailbox = Mailbox(options['mailbox'])
        except ValueError as e:
            raise CommandError(str(e)) from e

        try:
            with open(options['file'], encoding='utf-8') as f:
                snapshot = parse_snapshot(json.load(f))
        except (OSError, ValueError) as e:
            raise CommandError(f'Invalid counters snapshot: {e}') from e

        service = get_mailstore_service()
        service.label_store.set_counters(mailbox, snapshot)

        self.stdout.write(self.style.SUCCESS(f'Reconciled counters of {len(snapshot)} labels for {mailbox}'))
