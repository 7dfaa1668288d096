"""
Version 1 (time based) UUID helpers

Message ids are version 1 UUIDs built from a millisecond timestamp. Their
sortable string form puts the 60-bit timestamp first, so that the natural
ordering of index columns follows message time.
"""
import random
import uuid

# 100ns intervals between the UUID epoch (1582-10-15) and the UNIX epoch
UUID_EPOCH_OFFSET = 0x01B21DD213814000

_random = random.SystemRandom()


def time_uuid_from_ms(timestamp_ms: int) -> uuid.UUID:
    """
    Build a version 1 UUID for the given time with random clock sequence and node
    """
    clock_seq = _random.getrandbits(14)
    # random node id must have the multicast bit set (RFC 4122, 4.5)
    node = _random.getrandbits(48) | 0x010000000000
    return _build_time_uuid(timestamp_ms * 10000 + UUID_EPOCH_OFFSET, clock_seq, node)


def get_timestamp_ms(message_id: uuid.UUID) -> int:
    check_time_uuid(message_id)
    return (message_id.time - UUID_EPOCH_OFFSET) // 10000


def to_sortable(message_id: uuid.UUID) -> str:
    """
    Encode UUID as fixed length hex string ordered by time, clock sequence, node
    """
    check_time_uuid(message_id)
    return f"{message_id.time:015x}{message_id.clock_seq:04x}{message_id.node:012x}"


def from_sortable(value: str) -> uuid.UUID:
    if len(value) != 31:
        raise ValueError(f"malformed sortable message id: {value}")
    return _build_time_uuid(int(value[:15], 16), int(value[15:19], 16), int(value[19:], 16))


def _build_time_uuid(timestamp: int, clock_seq: int, node: int) -> uuid.UUID:
    time_low = timestamp & 0xFFFFFFFF
    time_mid = (timestamp >> 32) & 0xFFFF
    time_hi_version = ((timestamp >> 48) & 0x0FFF) | (1 << 12)
    clock_seq_low = clock_seq & 0xFF
    clock_seq_hi_variant = ((clock_seq >> 8) & 0x3F) | 0x80
    return uuid.UUID(fields=(time_low, time_mid, time_hi_version,
                             clock_seq_hi_variant, clock_seq_low, node))


def check_time_uuid(message_id: uuid.UUID) -> None:
    if message_id.version != 1:
        raise ValueError(f"message id must be a time based UUID, got version {message_id.version}")
