class _Singleton(type):
    """
    A metaclass that creates a Singleton base class when called.
    The instance is identified by the super class and the arguments passed to it.
    @reference: https://stackoverflow.com/questions/6760685/what-is-the-best-way-of-implementing-singleton-in-python
    """

    _instances = {}

    def __call__(clazz, *args, **kwargs):
        args_hash = hash(args + tuple(sorted(kwargs.items())))
        if clazz not in clazz._instances:
            clazz._instances[clazz] = {}
        if args_hash not in clazz._instances[clazz]:
            clazz._instances[clazz][args_hash] = super(_Singleton, clazz).__call__(*args, **kwargs)
        return clazz._instances[clazz][args_hash]


class Singleton(_Singleton('SingletonMeta', (object,), {})):

    @classmethod
    def clear_instances(cls) -> None:
        """
        Drop every cached instance of this class, so that the next call builds a fresh one
        """
        type(cls)._instances.pop(cls, None)

    @classmethod
    def clear_instance(cls, instance) -> None:
        """
        Drop one cached instance of this class, other arguments keep theirs
        """
        cached = type(cls)._instances.get(cls, {})
        for args_hash in [args_hash for args_hash, value in cached.items() if value is instance]:
            del cached[args_hash]
