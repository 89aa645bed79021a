"""Tests for the extension queries and for attaching them to classes."""

import pytest

from classextension import (
    Extensible,
    Extension,
    InvalidExtensionError,
    add_methods_to_class,
    extend,
    get_extensions,
    instance_get_extensions,
    instance_is_directly_extended,
    instance_is_extended_with,
    is_directly_extended,
    is_extended_with,
)

CAPABILITIES = ["extend", "is_extended_with", "get_extensions", "is_directly_extended"]


def _subclassing() -> Extension:
    return Extension(extend=lambda cls: type(cls.__name__, (cls,), {}))


def _named(name: str, version: str) -> Extension:
    return Extension(
        name=name, version=version, extend=lambda cls: type(cls.__name__, (cls,), {})
    )


class TestAddMethodsToClass:
    @pytest.mark.parametrize("method_name", CAPABILITIES)
    def test_adds_class_methods(self, method_name: str) -> None:
        @add_methods_to_class
        class Model:
            pass

        assert callable(getattr(Model, method_name))
        assert callable(getattr(Model(), method_name))

    def test_adds_extension_class(self) -> None:
        Model = add_methods_to_class(type("Model", (), {}))
        assert Model.Extension is Extension

    def test_returns_input_class(self) -> None:
        class Model:
            pass

        assert add_methods_to_class(Model) is Model

    def test_rejects_non_class(self) -> None:
        with pytest.raises(InvalidExtensionError):
            add_methods_to_class(lambda: None)  # type: ignore[type-var]

    def test_methods_chain(self) -> None:
        Model = add_methods_to_class(type("Model", (), {}))
        extension1 = _subclassing()
        extension2 = _subclassing()
        subclass = Model.extend(extension1).extend(extension2)
        assert subclass.get_extensions() == [extension1, extension2]
        assert subclass().is_extended_with(extension1)


class TestExtensible:
    def test_extend_as_class_method(self) -> None:
        class Model(Extensible):
            pass

        extension = Model.Extension(extend=lambda cls: type("Sub", (cls,), {}))
        subclass = Model.extend(extension)
        assert subclass.__bases__ == (Model,)
        assert Model.extend(extension) is subclass

    def test_extend_with_version_range(self) -> None:
        class Model(Extensible):
            pass

        subclass = Model.extend(_named("foo", "1.0.0"))
        assert subclass.extend(_named("foo", "1.1.0"), version="^1.0.0") is subclass

    def test_instance_queries_delegate_to_class(self) -> None:
        class Model(Extensible):
            pass

        extension = _subclassing()
        subclass = Model.extend(extension)
        instance = subclass()
        assert instance.is_extended_with(extension)
        assert instance.get_extensions() == [extension]
        assert instance.is_directly_extended()
        assert not Model().is_directly_extended()


class TestIsExtendedWith:
    def test_true_after_extension(self) -> None:
        extension = _subclassing()
        assert is_extended_with(extend(type("Base", (), {}), extension), extension)

    def test_true_for_earlier_extension(self) -> None:
        extension1 = _subclassing()
        extension2 = _subclassing()
        subclass = extend(extend(type("Base", (), {}), extension1), extension2)
        assert is_extended_with(subclass, extension1)
        assert is_extended_with(subclass, extension2)

    def test_true_for_other_version_of_named_extension(self) -> None:
        subclass = extend(type("Base", (), {}), _named("foo", "1.0.0"))
        subclass = extend(subclass, _subclassing())
        assert is_extended_with(subclass, _named("foo", "2.0.0"))

    def test_false_for_original_class(self) -> None:
        class Base:
            pass

        extension = _subclassing()
        extend(Base, extension)
        assert not is_extended_with(Base, extension)

    def test_false_for_other_extension(self) -> None:
        subclass = extend(type("Base", (), {}), _subclassing())
        assert not is_extended_with(subclass, _subclassing())

    def test_false_for_other_name(self) -> None:
        subclass = extend(type("Base", (), {}), _named("foo", "1.0.0"))
        assert not is_extended_with(subclass, _named("bar", "1.0.0"))

    def test_false_for_plain_subclass(self) -> None:
        extension = _subclassing()
        subclass = extend(type("Base", (), {}), extension)

        class Plain(subclass):  # type: ignore[misc, valid-type]
            pass

        assert not is_extended_with(Plain, extension)

    def test_validates_extension(self) -> None:
        with pytest.raises(InvalidExtensionError, match="extension must be an extension object"):
            is_extended_with(type("Base", (), {}), None)

    def test_instance_variant(self) -> None:
        extension = _subclassing()
        subclass = extend(type("Base", (), {}), extension)
        assert instance_is_extended_with(subclass(), extension)

    def test_instance_variant_rejects_none(self) -> None:
        with pytest.raises(InvalidExtensionError, match="Not a class instance"):
            instance_is_extended_with(None, _subclassing())


class TestGetExtensions:
    def test_empty_when_never_extended(self) -> None:
        class Base:
            pass

        class Plain(Base):
            pass

        assert get_extensions(Base) == []
        assert get_extensions(Plain) == []
        assert instance_get_extensions(Base()) == []

    def test_one_extension(self) -> None:
        extension = _subclassing()
        subclass = extend(type("Base", (), {}), extension)

        class Plain(subclass):  # type: ignore[misc, valid-type]
            pass

        assert get_extensions(subclass) == [extension]
        assert get_extensions(Plain) == [extension]

    def test_order_of_application(self) -> None:
        extension1 = _subclassing()
        extension2 = _subclassing()
        subclass = extend(extend(type("Base", (), {}), extension1), extension2)

        class Plain(subclass):  # type: ignore[misc, valid-type]
            pass

        assert get_extensions(subclass) == [extension1, extension2]
        assert get_extensions(Plain) == [extension1, extension2]
        assert instance_get_extensions(Plain()) == [extension1, extension2]

    def test_ancestor_is_unaffected(self) -> None:
        extension1 = _subclassing()
        extension2 = _subclassing()
        subclass = extend(type("Base", (), {}), extension1)
        extend(subclass, extension2)
        assert get_extensions(subclass) == [extension1]

    def test_returns_a_fresh_list(self) -> None:
        extension = _subclassing()
        subclass = extend(type("Base", (), {}), extension)
        get_extensions(subclass).clear()
        assert get_extensions(subclass) == [extension]


class TestIsDirectlyExtended:
    def test_true_after_one_extension(self) -> None:
        assert is_directly_extended(extend(type("Base", (), {}), _subclassing()))

    def test_true_after_two_extensions(self) -> None:
        subclass = extend(extend(type("Base", (), {}), _subclassing()), _subclassing())
        assert is_directly_extended(subclass)

    def test_false_for_plain_subclass(self) -> None:
        subclass = extend(extend(type("Base", (), {}), _subclassing()), _subclassing())

        class Plain(subclass):  # type: ignore[misc, valid-type]
            pass

        assert not is_directly_extended(Plain)
        assert not instance_is_directly_extended(Plain())

    def test_false_when_never_extended(self) -> None:
        assert not is_directly_extended(type("Base", (), {}))

    def test_input_class_is_not_directly_extended(self) -> None:
        class Base:
            pass

        extend(Base, _subclassing())
        assert not is_directly_extended(Base)
