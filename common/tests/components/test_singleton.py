from unittest import TestCase

from common.components.singleton import Singleton


class OneArgSingleton(Singleton):
    def __init__(self, name: str):
        self.name = name


class AnotherArgSingleton(Singleton):
    def __init__(self, name: str):
        self.name = name


class MultiArgSingleton(Singleton):
    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description


class NoArgSingleton(Singleton):
    def __init__(self):
        self.calls = 0


class TestSingleton(TestCase):
    def test_instance_identity(self):
        instance_1 = OneArgSingleton("foo")
        instance_2 = OneArgSingleton("foo")
        instance_3 = OneArgSingleton("bar")
        self.assertIs(instance_1, instance_2)
        self.assertIsNot(instance_1, instance_3)

        # None and blank arguments are keys like any other
        self.assertIs(OneArgSingleton(None), OneArgSingleton(None))
        self.assertIsNot(OneArgSingleton(""), OneArgSingleton(" "))

    def test_keyword_order_does_not_matter(self):
        instance_1 = MultiArgSingleton(name="a", description="b")
        instance_2 = MultiArgSingleton(description="b", name="a")
        self.assertIs(instance_1, instance_2)
        self.assertIsNot(MultiArgSingleton("a", "b"), MultiArgSingleton("b", "a"))

    def test_classes_do_not_share_instances(self):
        self.assertIsNot(OneArgSingleton("foo"), AnotherArgSingleton("foo"))

    def test_clear_instances(self):
        instance_1 = NoArgSingleton()
        instance_1.calls = 5

        NoArgSingleton.clear_instances()
        instance_2 = NoArgSingleton()

        self.assertIsNot(instance_1, instance_2)
        self.assertEqual(instance_2.calls, 0)
        self.assertIs(instance_2, NoArgSingleton())

    def test_clear_instances_keeps_other_classes(self):
        instance = AnotherArgSingleton("kept")
        OneArgSingleton.clear_instances()
        self.assertIs(instance, AnotherArgSingleton("kept"))

    def test_clear_instance_keeps_other_arguments(self):
        dropped = OneArgSingleton("dropped")
        kept = OneArgSingleton("kept")

        OneArgSingleton.clear_instance(dropped)

        self.assertIsNot(dropped, OneArgSingleton("dropped"))
        self.assertIs(kept, OneArgSingleton("kept"))
