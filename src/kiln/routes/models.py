"""Route data model — descriptors, metadata and parameter results.

All records are frozen dataclasses created fresh on every build.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from kiln._errors import ContentError

_EMPTY: Mapping[str, Any] = MappingProxyType({})

_PARAM_RESULT_KEYS = frozenset({"params", "props", "metadata"})


@dataclass(frozen=True, slots=True)
class Metadata:
    """Document head metadata.

    Attributes:
        title: Document title.
        description: Meta description.
        image: Optional social-preview image URL.

    """

    title: str
    description: str
    image: str | None = None

    @classmethod
    def coerce(cls, value: object, *, origin: str) -> Metadata:
        """Build Metadata from a Metadata instance or a mapping.

        Mappings may carry the image either as ``image`` or nested as
        ``opengraph: {image: ...}``.

        Raises:
            ContentError: If *value* is not a usable metadata record.

        """
        if isinstance(value, Metadata):
            return value
        if not isinstance(value, Mapping):
            msg = f"{origin}: metadata must be a mapping, got {type(value).__name__}"
            raise ContentError(msg)

        title = value.get("title")
        description = value.get("description")
        if not isinstance(title, str) or not isinstance(description, str):
            msg = f"{origin}: metadata requires string 'title' and 'description'"
            raise ContentError(msg)

        image = value.get("image")
        opengraph = value.get("opengraph")
        if image is None and isinstance(opengraph, Mapping):
            image = opengraph.get("image")
        if image is not None and not isinstance(image, str):
            msg = f"{origin}: metadata image must be a string"
            raise ContentError(msg)

        return cls(title=title, description=description, image=image)


@dataclass(frozen=True, slots=True)
class ParamResult:
    """One entry returned by a page's ``generate_static_params`` hook.

    Attributes:
        params: Parameter name to string value.
        props: Extra render-time properties for this route.
        metadata: Metadata overriding the page's static ``metadata``.

    """

    params: Mapping[str, str]
    props: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    metadata: Metadata | None = None

    @classmethod
    def coerce(cls, value: object, *, origin: str) -> ParamResult:
        """Validate a raw hook result and return a ParamResult.

        Raises:
            ContentError: On unknown keys, non-string params or non-mapping props.

        """
        if isinstance(value, ParamResult):
            return value
        if not isinstance(value, Mapping):
            msg = f"{origin}: parameter result must be a mapping, got {type(value).__name__}"
            raise ContentError(msg)

        unknown = set(value) - _PARAM_RESULT_KEYS
        if unknown:
            msg = f"{origin}: unknown parameter result keys {sorted(unknown)}"
            raise ContentError(msg)

        params = value.get("params")
        if not isinstance(params, Mapping):
            msg = f"{origin}: parameter result requires a 'params' mapping"
            raise ContentError(msg)
        for name, param in params.items():
            if not isinstance(param, str):
                msg = (
                    f"{origin}: param {name!r} must be a str, "
                    f"got {type(param).__name__}"
                )
                raise ContentError(msg)

        props = value.get("props")
        if props is None:
            props = _EMPTY
        elif not isinstance(props, Mapping):
            msg = f"{origin}: 'props' must be a mapping, got {type(props).__name__}"
            raise ContentError(msg)

        metadata = value.get("metadata")
        return cls(
            params=MappingProxyType(dict(params)),
            props=MappingProxyType(dict(props)),
            metadata=None if metadata is None else Metadata.coerce(metadata, origin=origin),
        )


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """A resolved unit of work: one page to render and write.

    Attributes:
        logical_path: Route path from the source tree; dynamic segments stay
            in placeholder form (``todo/[id]``).
        output_file: Output file relative to the output root.
        source: Absolute path of the backing page module.
        is_dynamic: Whether the route came from a parameterized page.
        params: Parameter values (dynamic routes only).
        props: Extra render-time properties from the parameter generator.
        metadata: Per-route metadata override.

    """

    logical_path: str
    output_file: str
    source: Path
    is_dynamic: bool = False
    params: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    props: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    metadata: Metadata | None = None

    def render_props(self) -> dict[str, Any]:
        """Props bag handed to the page unit.

        Dynamic routes receive ``params`` merged with their extra props;
        static routes receive an empty bag.

        """
        if not self.is_dynamic:
            return {}
        return {"params": dict(self.params), **self.props}
