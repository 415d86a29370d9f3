"""Classes used by autowiring tests that resolve keys by dotted path."""

from abc import ABC, abstractmethod
from typing import Protocol


class FooInterface(ABC):
    @abstractmethod
    def name(self) -> str: ...


class FooProtocol(Protocol):
    def name(self) -> str: ...


class FooNoConstructor:
    pass


class FooConstructorNoArgs:
    def __init__(self) -> None:
        self.built = True


class FooConstructorOneArg:
    def __init__(self, arg: FooNoConstructor) -> None:
        self.arg = arg


class FooConstructorMultipleArgs:
    def __init__(self, arg1: FooNoConstructor, arg2: FooNoConstructor) -> None:
        self.arg1 = arg1
        self.arg2 = arg2


class FooRecursiveArgs:
    def __init__(self, arg: FooConstructorMultipleArgs) -> None:
        self.arg = arg


class FooImplementation(FooInterface):
    def name(self) -> str:
        return "implementation"


class FooTestBinding:
    def __init__(self, arg: FooInterface) -> None:
        self.arg = arg


class FooDefaults:
    def __init__(self, retries: int = 3, label="foo", *, dep: FooNoConstructor) -> None:  # noqa: ANN001
        self.retries = retries
        self.label = label
        self.dep = dep


class FooUntypedRequired:
    def __init__(self, value) -> None:  # noqa: ANN001
        self.value = value


class FooBuiltinRequired:
    def __init__(self, count: int) -> None:
        self.count = count


class FooCycleA:
    def __init__(self, b: "FooCycleB") -> None:
        self.b = b


class FooCycleB:
    def __init__(self, a: FooCycleA) -> None:
        self.a = a


class FooVariadic:
    def __init__(self, dep: FooNoConstructor, *args: object, **kwargs: object) -> None:
        self.dep = dep
        self.args = args
        self.kwargs = kwargs
