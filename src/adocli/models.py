"""Canonical Pydantic models shared across all adocli modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`OutputConfig` and :class:`GlobalConfig`.

**Catalog models** -- deserialised from the operation catalog and never
mutated afterwards (all are frozen):
    :class:`HTTPMethod`, :class:`EnumValue`, :class:`EnumData`,
    :class:`ParameterSpec`, :class:`ParameterSet` and :class:`Operation`.

**Pipeline models** -- produced while serving one invocation:
    :class:`ResolvedOperation` and :class:`RequestDescriptor`.

Catalog models accept the camelCase keys of the catalog document
(``urlTemplate``, ``apiVersion``, ...) through field aliases and ignore any
key they do not declare, such as the ``responses`` block the catalog build
emits.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Config ---


class RequestConfig(BaseModel):
    """HTTP settings applied to every API call."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output preferences stored in :class:`GlobalConfig`."""

    pretty: bool = Field(
        default=False, description="Pretty-print JSON responses without --pretty"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/adocli/config.json``.

    Loaded by :func:`~adocli.config.load_global_config`. The organization and project
    defaults sit below explicit parameters and environment variables in the
    precedence chain; see :func:`~adocli.config.resolve_defaults`.
    """

    default_organization: Optional[str] = None
    default_project: Optional[str] = None
    catalog: Optional[str] = Field(
        default=None, description="Path to a catalog file replacing the bundled one"
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Catalog ---


class HTTPMethod(str, enum.Enum):
    """HTTP verbs an operation may declare.

    The values are the lowercase strings the catalog stores. The set is
    closed: a catalog entry using any other verb is rejected at load time.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


class EnumValue(BaseModel):
    """One allowed value of an enumerated parameter."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    value: str
    description: Optional[str] = None


class EnumData(BaseModel):
    """Enumeration metadata attached to a :class:`ParameterSpec`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    values: list[EnumValue] = Field(default_factory=list)


class ParameterSpec(BaseModel):
    """Describes one expected path, query, header or body parameter.

    A spec never holds a runtime value; values come from the parsed
    command line and are matched to specs by ``name``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    description: Optional[str] = None
    required: bool = False
    type: Optional[str] = None
    format: Optional[str] = None
    enum: Optional[EnumData] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")


class ParameterSet(BaseModel):
    """All parameter specs of one operation, grouped by location."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: list[ParameterSpec] = Field(default_factory=list)
    query: list[ParameterSpec] = Field(default_factory=list)
    header: list[ParameterSpec] = Field(default_factory=list)
    body: Optional[ParameterSpec] = None


class Operation(BaseModel):
    """A single remote call described by the catalog.

    Several operations may share a ``name`` across areas or verbs; the
    :class:`~adocli.engine.resolver.OperationResolver` narrows them down.

    Example::

        Operation(
            name="list-pull-requests",
            urlTemplate="/{organization}/{project}/_apis/git/pullrequests",
            verb="get",
            apiVersion="7.1",
            host="dev.azure.com",
        )
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    url_template: str = Field(alias="urlTemplate")
    verb: HTTPMethod
    api_version: str = Field(alias="apiVersion")
    host: str
    description: Optional[str] = None
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: ParameterSet = Field(default_factory=ParameterSet)


# --- Pipeline ---


class ResolvedOperation(BaseModel):
    """The single operation a command name resolved to, and where it was found.

    The area is authoritative even when the caller never supplied one.
    """

    model_config = ConfigDict(frozen=True)

    area: str
    operation: Operation


class RequestDescriptor(BaseModel):
    """A fully-formed request, ready to be handed to the transport."""

    model_config = ConfigDict(frozen=True)

    verb: HTTPMethod
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None
