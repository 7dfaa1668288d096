import random
from typing import Set

from app_mailstore.consts.label_const import MAX_LABEL_ID, MAX_LABEL_NAME_LENGTH, MAX_NEW_LABEL_ID_ATTEMPTS, \
    MAX_RESERVED_LABEL_ID, NESTED_LABEL_SEPARATOR
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.exceptions.existing_label_exception import ExistingLabelException
from app_mailstore.exceptions.illegal_label_exception import IllegalLabelException
from app_mailstore.models.label import LabelMap

_random = random.Random()


def generate_label_id(existing_ids: Set[int], rng: random.Random = None) -> int:
    """
    Pick a random id from the dynamic range which is not among the existing ids

    Raises:
        IllegalLabelException: no free id found within the attempt limit
    """
    rng = rng or _random
    for _ in range(MAX_NEW_LABEL_ID_ATTEMPTS):
        label_id = rng.randrange(MAX_RESERVED_LABEL_ID, MAX_LABEL_ID)
        if label_id not in existing_ids:
            return label_id
    raise IllegalLabelException("Label space exhausted")


def validate_label_name(name: str, existing_labels: LabelMap,
                        max_length: int = MAX_LABEL_NAME_LENGTH) -> None:
    """
    Validate label name against the naming rules and the existing labels

    Raises:
        IllegalLabelException: name breaks a naming rule
        ExistingLabelException: name is already used by another label
    """
    if not name:
        raise IllegalLabelException("Label name cannot be empty")

    if len(name) > max_length:
        raise IllegalLabelException("Label name exceeds maximum allowed length")

    if existing_labels.contains_name(name):
        raise ExistingLabelException("Label with this name already exists")

    for reserved in ReservedLabelEnum:
        if name.startswith(reserved.label_name + NESTED_LABEL_SEPARATOR):
            raise IllegalLabelException("Nested labels are not allowed under reserved labels")

    if NESTED_LABEL_SEPARATOR * 2 in name:
        raise IllegalLabelException("Illegal use of nested label separator")
