import random
from unittest import TestCase
from unittest.mock import MagicMock

from app_mailstore.consts.label_const import MAX_LABEL_ID, MAX_RESERVED_LABEL_ID
from app_mailstore.exceptions.existing_label_exception import ExistingLabelException
from app_mailstore.exceptions.illegal_label_exception import IllegalLabelException
from app_mailstore.models.label import Label, LabelMap
from app_mailstore.utils.label_util import generate_label_id, validate_label_name


class TestGenerateLabelId(TestCase):
    def test_id_in_dynamic_range(self):
        rng = random.Random(7)
        for _ in range(200):
            label_id = generate_label_id({0, 1, 2}, rng)
            self.assertGreaterEqual(label_id, MAX_RESERVED_LABEL_ID)
            self.assertLess(label_id, MAX_LABEL_ID)

    def test_skips_existing_ids(self):
        self.assertEqual(generate_label_id({20, 21}, MagicMock(randrange=MagicMock(side_effect=[20, 21, 77]))), 77)

    def test_space_exhausted(self):
        with self.assertRaises(IllegalLabelException):
            generate_label_id({500}, MagicMock(randrange=MagicMock(return_value=500)))


class TestValidateLabelName(TestCase):
    def setUp(self):
        self.labels = LabelMap()
        self.labels.put(Label(id=0, name="all"))
        self.labels.put(Label(id=1, name="inbox"))
        self.labels.put(Label(id=42, name="work"))

    def test_valid_names(self):
        validate_label_name("personal", self.labels)
        validate_label_name("work^projects", self.labels)
        validate_label_name("Work", self.labels)
        validate_label_name("inboxes^old", self.labels)

    def test_empty(self):
        with self.assertRaises(IllegalLabelException):
            validate_label_name("", self.labels)

    def test_too_long(self):
        validate_label_name("x" * 10, self.labels, max_length=10)
        with self.assertRaises(IllegalLabelException):
            validate_label_name("x" * 11, self.labels, max_length=10)

    def test_duplicate(self):
        with self.assertRaises(ExistingLabelException):
            validate_label_name("work", self.labels)

    def test_nested_under_reserved(self):
        with self.assertRaises(IllegalLabelException):
            validate_label_name("inbox^private", self.labels)

    def test_double_separator(self):
        with self.assertRaises(IllegalLabelException):
            validate_label_name("work^^projects", self.labels)
