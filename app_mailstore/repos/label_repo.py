"""
Label name repository

Label names live in the mailbox partition, one column per label id.
Reserved labels are always part of the result, whether the mailbox was
provisioned or not.
"""
import logging

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch
from app_mailstore.consts.mailstore_const import CF_LABELS
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.models.label import Label, LabelMap
from app_mailstore.models.mailbox import Mailbox

logger = logging.getLogger(__name__)


class LabelRepo:

    def __init__(self, kv_store: KeyValueStore):
        self.kv_store = kv_store

    def get_labels(self, mailbox: Mailbox) -> LabelMap:
        labels = LabelMap()
        for reserved in ReservedLabelEnum:
            labels.put(Label(id=reserved.label_id, name=reserved.label_name))
        for column, name in self.kv_store.get_row(CF_LABELS, mailbox.id).items():
            label_id = int(column)
            # reserved names are immutable, whatever is stored
            if ReservedLabelEnum.contains(label_id) and label_id in labels:
                continue
            labels.put(Label(id=label_id, name=name))
        return labels

    def set_label_name(self, batch: WriteBatch, mailbox: Mailbox, label_id: int, name: str) -> None:
        batch.upsert(CF_LABELS, mailbox.id, {str(label_id): name})

    def delete_label(self, batch: WriteBatch, mailbox: Mailbox, label_id: int) -> None:
        batch.delete_columns(CF_LABELS, mailbox.id, [str(label_id)])

    def delete_all(self, batch: WriteBatch, mailbox: Mailbox) -> None:
        batch.delete_row(CF_LABELS, mailbox.id)
