# -*- coding: utf-8 -*-
"""
Kernel Option Annotations - Declarative option constraints via typing.Annotated.

Provides constraint marker types (``Range``, ``Desc``) for use inside
``typing.Annotated`` annotations on ``ParamSet`` subclasses, the
``ParamSpec`` introspection class, and ``KernelOptions``, the validated
record of the kernel options a resampler understands.

Usage
-----
Declare options as class-body annotations::

    from typing import Annotated
    from tapgen.params import ParamSet, Range, Desc

    class MyOptions(ParamSet):
        width: Annotated[float, Range(min=1.0, max=5.0), Desc('Width')] = 2.0

Options are collected into ``cls.__param_specs__`` at class definition
time and a keyword-only ``__init__`` is generated. Option mappings use
hyphenated keys (``'max-taps'``); field names use underscores
(``max_taps``).

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import inspect
import logging
import math
import numbers
from typing import (
    Annotated,
    Any,
    Dict,
    Mapping,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# tapgen internal
from tapgen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# =====================================================================
# Constraint marker types  (used inside Annotated[...])
# =====================================================================

class ParamMeta:
    """Base marker for option metadata in ``Annotated`` types.

    Any ``Annotated`` class-body field whose metadata includes at least one
    ``ParamMeta`` subclass instance is treated as an option by
    ``ParamSet.__init_subclass__``.
    """


class Range(ParamMeta):
    """Inclusive numeric range constraint.

    Parameters
    ----------
    min : int or float, optional
        Minimum allowed value (inclusive).
    max : int or float, optional
        Maximum allowed value (inclusive).
    """

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[Union[int, float]] = None,
        max: Optional[Union[int, float]] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        parts = []
        if self.min is not None:
            parts.append(f"min={self.min!r}")
        if self.max is not None:
            parts.append(f"max={self.max!r}")
        return f"Range({', '.join(parts)})"


class Desc(ParamMeta):
    """Human-readable option description.

    Parameters
    ----------
    text : str
        Description text.
    """

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec
# =====================================================================

class ParamSpec:
    """Resolved specification for a single option.

    Built automatically from ``Annotated`` declarations by
    ``collect_param_specs``.

    Attributes
    ----------
    name : str
        Field name (keyword-argument key).
    key : str
        Option-mapping key, ``name`` with underscores replaced by hyphens.
    param_type : type
        Expected Python type, ``float`` or ``int``.
    default : Any
        Default value.
    description : str
        Human-readable description.
    min_value : int, float, or None
        Inclusive minimum (from ``Range``).
    max_value : int, float, or None
        Inclusive maximum (from ``Range``).
    """

    __slots__ = (
        'name', 'key', 'param_type', 'default',
        'description', 'min_value', 'max_value',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any,
        description: str,
        min_value: Optional[Union[int, float]],
        max_value: Optional[Union[int, float]],
    ) -> None:
        self.name = name
        self.key = name.replace('_', '-')
        self.param_type = param_type
        self.default = default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value

    def validate(self, value: Any) -> None:
        """Validate *value* against this spec's type and range.

        * Any real number is accepted when ``param_type`` is ``float``;
          ``int`` options require an integral value.
        * Booleans, NaN and infinities are rejected.
        * Range bounds are inclusive.

        Raises
        ------
        ConfigurationError
            If *value* has the wrong type or is out of range.
        """
        if self.param_type is int:
            expected = numbers.Integral
        else:
            expected = numbers.Real
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigurationError(
                f"Option '{self.key}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )
        if not isinstance(value, numbers.Integral) and not math.isfinite(value):
            raise ConfigurationError(
                f"Option '{self.key}' must be finite, got {value!r}"
            )

        if self.min_value is not None and value < self.min_value:
            raise ConfigurationError(
                f"Option '{self.key}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ConfigurationError(
                f"Option '{self.key}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )

    def __repr__(self) -> str:
        parts = (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"default={self.default!r}"
        )
        if self.min_value is not None:
            parts += f", min_value={self.min_value!r}"
        if self.max_value is not None:
            parts += f", max_value={self.max_value!r}"
        return parts + ")"


# =====================================================================
# Annotation collection
# =====================================================================

def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` type hints on *cls* into a tuple of ``ParamSpec``.

    Only fields whose ``Annotated`` metadata includes at least one
    ``ParamMeta`` instance are collected. Fields are ordered by MRO
    (parent-first, preserving declaration order within each class).

    Raises
    ------
    TypeError
        If an option has no default value.
    """
    hints = get_type_hints(cls, include_extras=True)

    seen: set = set()
    ordered_names: list = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name not in seen and name in hints:
                seen.add(name)
                ordered_names.append(name)

    specs: list = []
    for name in ordered_names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue

        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue

        range_meta: Optional[Range] = None
        desc_meta: Optional[Desc] = None
        for m in metas:
            if isinstance(m, Range):
                range_meta = m
            elif isinstance(m, Desc):
                desc_meta = m

        if not hasattr(cls, name):
            raise TypeError(
                f"Option '{name}' on {cls.__qualname__} has no default."
            )

        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=getattr(cls, name),
            description=desc_meta.text if desc_meta else '',
            min_value=range_meta.min if range_meta else None,
            max_value=range_meta.max if range_meta else None,
        ))

    return tuple(specs)


# =====================================================================
# __init__ generation
# =====================================================================

def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build an ``__init__`` from *param_specs* with a proper signature.

    The generated function:

    1. Accepts keyword-only arguments matching each spec.
    2. Falls back to the spec default when a kwarg is absent.
    3. Validates every value via ``spec.validate(value)``.
    4. Sets ``self.<name> = value`` (bypassing the immutability guard).
    """
    _specs = param_specs

    def __init__(self, **kwargs):
        expected = {s.name for s in _specs}
        unexpected = set(kwargs) - expected
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )

        for spec in _specs:
            value = kwargs.get(spec.name, spec.default)
            spec.validate(value)
            object.__setattr__(self, spec.name, value)

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in _specs:
        params.append(inspect.Parameter(
            spec.name,
            inspect.Parameter.KEYWORD_ONLY,
            default=spec.default,
            annotation=spec.param_type,
        ))
    __init__.__signature__ = inspect.Signature(params)
    return __init__


# =====================================================================
# ParamSet base
# =====================================================================

class ParamSet:
    """Immutable, validated set of options declared with ``Annotated``.

    Subclasses declare fields; ``__init_subclass__`` collects them into
    ``__param_specs__`` and installs a generated keyword-only
    ``__init__``.
    """

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    @classmethod
    def from_mapping(
        cls,
        options: Optional[Mapping[str, Any]] = None,
    ) -> 'ParamSet':
        """Build an instance from a hyphen-keyed option mapping.

        Unrecognized keys are ignored; missing keys take their defaults.

        Parameters
        ----------
        options : Mapping[str, Any], optional
            Option values keyed by ``'cubic-b'``, ``'max-taps'``, etc.

        Returns
        -------
        ParamSet
            Validated instance of *cls*.

        Raises
        ------
        ConfigurationError
            If a recognized option has a bad type or value.
        """
        options = options or {}
        by_key = {spec.key: spec for spec in cls.__param_specs__}
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            spec = by_key.get(key)
            if spec is None:
                logger.debug("Ignoring unrecognized option %r", key)
                continue
            kwargs[spec.name] = value
        return cls(**kwargs)

    def as_dict(self) -> Dict[str, Any]:
        """Return all option values keyed by their hyphenated names."""
        return {
            spec.key: getattr(self, spec.name)
            for spec in self.__param_specs__
        }

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"{type(self).__name__} is immutable; cannot set '{name}'"
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.as_dict().items())))

    def __repr__(self) -> str:
        body = ', '.join(
            f"{spec.name}={getattr(self, spec.name)!r}"
            for spec in self.__param_specs__
        )
        return f"{type(self).__name__}({body})"


class KernelOptions(ParamSet):
    """Kernel shape options recognized by the resampler.

    Option keys are the hyphenated field names (``max-taps``).
    """

    cubic_b: Annotated[float, Range(), Desc('Bicubic B shape parameter')] = 1.0 / 3.0
    cubic_c: Annotated[float, Range(), Desc('Bicubic C shape parameter')] = 1.0 / 3.0
    envelope: Annotated[
        float, Range(min=1.0, max=5.0), Desc('Lanczos window extent in lobes')
    ] = 2.0
    sharpness: Annotated[
        float, Range(min=0.5, max=1.5), Desc('Lanczos sinc frequency scale')
    ] = 1.0
    sharpen: Annotated[
        float, Range(min=0.0, max=1.0), Desc('Lanczos sinc offset')
    ] = 0.0
    max_taps: Annotated[
        int, Range(min=1), Desc('Hard cap on the generated tap count')
    ] = 16
