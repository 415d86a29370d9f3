"""Tests for entry registration and retrieval."""

from typing import Any

import pytest

from wirebox import (
    Container,
    WireboxCyclicDependencyError,
    WireboxImmutableError,
    WireboxNotFoundError,
)


class Service:
    pass


class InvokableDefinition:
    def __call__(self, container: Container) -> Service:
        return Service()


class TestConstruction:
    def test_instantiate_with_entries(self, entries: dict[str, object]) -> None:
        container = Container(entries)

        for key in entries:
            assert container.has(key)

    def test_keys_keep_insertion_order(self, entries: dict[str, object]) -> None:
        container = Container(entries)

        assert container.keys() == ["foo", "baz"]

    def test_class_keys_are_dotted_paths(self, container: Container) -> None:
        container.add(Service, lambda c: Service())

        assert container.keys() == [f"{__name__}.Service"]
        assert container.has(f"{__name__}.Service")
        assert isinstance(container.get(f"{__name__}.Service"), Service)


class TestAdd:
    def test_add_makes_entry_known(self, container: Container, entries: dict[str, object]) -> None:
        for key, value in entries.items():
            container.add(key, value)

        assert all(container.has(key) for key in entries)
        assert not container.has("missing")

    def test_add_overwrites_unresolved_entry_in_place(self, container: Container) -> None:
        container.add("a", 1)
        container.add("b", 2)
        container.add("a", 3)

        assert container.keys() == ["a", "b"]
        assert container.get("a") == 3

    def test_add_resolved_entry_raises(self, container: Container) -> None:
        container.add("service", lambda c: Service())
        container.get("service")

        with pytest.raises(WireboxImmutableError) as exc_info:
            container.add("service", lambda c: Service())

        assert exc_info.value.key == "service"

    def test_add_read_parameter_raises(self, container: Container) -> None:
        container.add("foo", "bar")
        container.get("foo")

        with pytest.raises(WireboxImmutableError):
            container.add("foo", "qux")

    def test_remove_then_add_succeeds(self, container: Container) -> None:
        container.add("service", lambda c: Service())
        first = container.get("service")

        container.remove("service")
        container.add("service", lambda c: Service())

        assert container.get("service") is not first

    def test_add_none_value(self, container: Container) -> None:
        container.add("nothing", None)

        assert container.has("nothing")
        assert container.get("nothing") is None


class TestGet:
    def test_get_not_found_entry(self, container: Container) -> None:
        with pytest.raises(WireboxNotFoundError) as exc_info:
            container.get("missing")

        assert exc_info.value.key == "missing"
        assert isinstance(exc_info.value, LookupError)

    def test_get_self_referencing_entry_raises(self, container: Container) -> None:
        container.add("a", lambda c: c.get("a"))

        with pytest.raises(WireboxCyclicDependencyError) as exc_info:
            container.get("a")

        assert exc_info.value.key == "a"
        assert exc_info.value.chain == ("a",)

    def test_get_transitive_cycle_reports_chain(self, container: Container) -> None:
        container.add("a", lambda c: c.get("b"))
        container.add("b", lambda c: c.get("c"))
        container.add("c", lambda c: c.get("a"))

        with pytest.raises(WireboxCyclicDependencyError) as exc_info:
            container.get("a")

        assert exc_info.value.chain == ("a", "b", "c")
        assert "a -> b -> c -> a" in str(exc_info.value)

    def test_cycle_does_not_poison_later_calls(self, container: Container) -> None:
        container.add("a", lambda c: c.get("a"))

        with pytest.raises(WireboxCyclicDependencyError):
            container.get("a")

        container.add("a", "recovered")
        assert container.get("a") == "recovered"

    def test_failing_definition_can_be_retried(self, container: Container) -> None:
        attempts: list[int] = []

        def flaky(c: Container) -> Service:
            attempts.append(1)
            if len(attempts) == 1:
                msg = "first call fails"
                raise RuntimeError(msg)
            return Service()

        container.add("flaky", flaky)

        with pytest.raises(RuntimeError):
            container.get("flaky")

        assert isinstance(container.get("flaky"), Service)
        assert len(attempts) == 2

    def test_get_parameter_and_service_entries(self, entries: dict[str, object]) -> None:
        container = Container(entries)

        assert container.get("foo") == "bar"
        assert type(container.get("baz")) is object

    def test_get_shares_instance_by_default(self, entries: dict[str, object]) -> None:
        container = Container(entries)

        first = container.get("baz")
        second = container.get("baz")

        assert first is second

    def test_definition_runs_once(self, container: Container) -> None:
        calls: list[Container] = []

        def build(c: Container) -> Service:
            calls.append(c)
            return Service()

        container.add("service", build)
        container.get("service")
        container.get("service")

        assert calls == [container]

    def test_definitions_receive_container(self, container: Container) -> None:
        container.add("dsn", "sqlite://")
        container.add("url", lambda c: c.get("dsn") + "memory")

        assert container.get("url") == "sqlite://memory"

    def test_get_via_invokable_object(self, container: Container) -> None:
        container.add("service", InvokableDefinition())

        assert isinstance(container.get("service"), Service)


class TestRemove:
    def test_remove_service_entry(self, entries: dict[str, object]) -> None:
        container = Container(entries)
        container.get("baz")

        container.remove("baz")

        assert not container.has("baz")
        assert container.keys() == ["foo"]
        with pytest.raises(WireboxNotFoundError):
            container.get("baz")

    def test_remove_missing_entry_is_noop(self, container: Container) -> None:
        container.remove("missing")
        container.remove("missing")

        assert container.keys() == []

    def test_definition_removing_its_own_entry(self, container: Container) -> None:
        def definition(c: Container) -> int:
            c.remove("a")
            return 1

        container.add("a", definition)

        assert container.get("a") == 1
        assert container.keys() == []
        assert not container.has("a")

        container.add("a", 2)

        assert container.get("a") == 2


class TestClassKeys:
    def test_classes_from_same_factory_get_separate_entries(self, container: Container) -> None:
        def make_service() -> type[Service]:
            class LocalService(Service):
                pass

            return LocalService

        first = make_service()
        second = make_service()
        container.add(first, lambda c: first())
        container.add(second, lambda c: second())

        assert len(container.keys()) == 2
        assert type(container.get(first)) is first
        assert type(container.get(second)) is second

    def test_same_dotted_path_different_class(self, container: Container) -> None:
        impostor = type("Service", (), {"__module__": __name__, "__qualname__": "Service"})
        container.add(Service, "original")
        container.add(impostor, "impostor")

        assert container.get(Service) == "original"
        assert container.get(impostor) == "impostor"
        assert container.get(f"{__name__}.Service") == "original"

    def test_has_does_not_remember_classes(self, container: Container) -> None:
        impostor = type("Service", (), {"__module__": __name__, "__qualname__": "Service"})

        assert not container.has(impostor)

        container.add(Service, "original")

        assert container.keys() == [f"{__name__}.Service"]
        assert not container.has(impostor)

    def test_remove_forgets_class(self, container: Container) -> None:
        impostor = type("Service", (), {"__module__": __name__, "__qualname__": "Service"})
        container.add(Service, "original")
        container.remove(Service)

        container.add(impostor, "impostor")

        assert container.keys() == [f"{__name__}.Service"]


class TestServiceProviders:
    def test_register_service_provider(self, container: Container) -> None:
        class Provider:
            def register(self, container: Container) -> None:
                container.add("host", "localhost")
                container.add("client", lambda c: f"client@{c.get('host')}")

        result = container.register(Provider())

        assert result is container
        assert container.get("client") == "client@localhost"

    def test_register_is_chainable(self, container: Container) -> None:
        class First:
            def register(self, container: Container) -> None:
                container.add("first", 1)

        class Second:
            def register(self, container: Container) -> None:
                container.add("second", 2)

        container.register(First()).register(Second())

        assert container.keys() == ["first", "second"]


class TestMappingAccess:
    def test_mapping_operations(self, container: Container) -> None:
        container["param"] = "value"
        container["service"] = lambda c: Service()

        assert "param" in container
        assert container["param"] == "value"
        assert isinstance(container["service"], Service)
        assert len(container) == 2
        assert list(container) == ["param", "service"]

        del container["param"]

        assert "param" not in container
        assert 42 not in container  # type: ignore[operator]

    def test_missing_item_raises_lookup_error(self, container: Container) -> None:
        with pytest.raises(LookupError):
            container["missing"]


class TestObservers:
    def test_global_extend_runs_on_every_get(self, entries: dict[str, object]) -> None:
        container = Container(entries)
        seen: list[Any] = []
        container.extend(lambda value, c: seen.append(value))

        container.get("foo")
        container.get("baz")
        container.get("baz")

        assert seen[0] == "bar"
        assert len(seen) == 3
        assert seen[1] is seen[2]

    def test_observer_receives_container(self, container: Container) -> None:
        received: list[Container] = []
        container.extend(lambda value, c: received.append(c))
        container.add("foo", "bar")

        container.get("foo")

        assert received == [container]

    def test_observers_run_in_insertion_order(self, container: Container) -> None:
        order: list[str] = []
        container.extend(lambda value, c: order.append("first"))
        container.extend(lambda value, c: order.append("second"))
        container.add("foo", "bar")

        container.get("foo")

        assert order == ["first", "second"]

    def test_observers_do_not_run_on_failure(self, container: Container) -> None:
        seen: list[Any] = []
        container.extend(lambda value, c: seen.append(value))

        with pytest.raises(WireboxNotFoundError):
            container.get("missing")

        assert seen == []
