# tplrender — template rendering adapter for web applications
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Template renderer adapter for web applications.

:class:`TemplateRenderer` is the interface a host application programs
against; :class:`JinjaRenderer` implements it on top of
:class:`~tplrender.engine.TemplateEngine`.

The adapter validates its inputs and delegates everything else.  It is not
safe to mutate a renderer's configuration (:meth:`add_path`,
:meth:`add_default_param`) from several threads at once.
"""

from __future__ import annotations

import logging
import warnings
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from tplrender.engine import TemplateEngine
from tplrender.paths import TemplatePath

logger = logging.getLogger(__name__)


class TemplateNotFoundError(LookupError):
    """The requested template does not exist in any search path."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template {name!r} could not be found")


class InvalidArgumentError(ValueError):
    """A configuration call received an empty or mistyped argument."""


class DuplicatePathWarning(UserWarning):
    """A second un-namespaced search path was ignored."""


class TemplateScope(Enum):
    """Scope marker for defaults that apply to every template."""

    ALL = "all"


TEMPLATE_ALL = TemplateScope.ALL


def _type_name(value: object) -> str:
    return type(value).__name__


class TemplateRenderer(ABC):
    """Interface for pluggable template renderers."""

    TEMPLATE_ALL = TEMPLATE_ALL

    @abstractmethod
    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str: ...

    @abstractmethod
    def add_default_param(
        self, scope: str | TemplateScope, params: Mapping[str, Any],
    ) -> None: ...

    @abstractmethod
    def add_path(self, path: str | Path, namespace: str | None = None) -> None: ...

    @abstractmethod
    def get_paths(self) -> list[TemplatePath]: ...


class JinjaRenderer(TemplateRenderer):
    """Render templates through a :class:`TemplateEngine`.

    Args:
        template_dir: Base template directory, or ``None`` to set it later
            with :meth:`add_path`.
        template_ext: Extension of template files, without the dot.
        data: Default variables for every template.
        autoescape: Enable HTML autoescaping in the engine.
    """

    def __init__(
        self,
        template_dir: str | Path | None,
        template_ext: str = "tpl",
        data: Mapping[str, Any] | None = None,
        *,
        autoescape: bool = False,
    ) -> None:
        self._engine = TemplateEngine(template_dir, template_ext, autoescape=autoescape)
        if data:
            self.add_default_param(TEMPLATE_ALL, data)

    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render template *name*.

        Raises :class:`TemplateNotFoundError` if *name* is empty or does not
        resolve to a template file.
        """
        if not name or not self._engine.exists(name):
            raise TemplateNotFoundError(name)
        logger.debug("Rendering template %s", name)
        return self._engine.render(name, data or {})

    def add_default_param(
        self, scope: str | TemplateScope, params: Mapping[str, Any],
    ) -> None:
        """Register default variables for one template or for all of them.

        Pass :data:`TEMPLATE_ALL` as *scope* to share *params* with every
        template; otherwise *scope* is a template name.
        """
        if scope is not TEMPLATE_ALL and (not isinstance(scope, str) or not scope):
            raise InvalidArgumentError(
                f"scope must be TEMPLATE_ALL or a non-empty template name; "
                f"received {_type_name(scope)}"
            )
        if not isinstance(params, Mapping) or not params:
            raise InvalidArgumentError(
                f"params must be a non-empty mapping; received {_type_name(params)}"
            )

        templates = None if scope is TEMPLATE_ALL else scope
        self._engine.add_data(params, templates)

    def add_path(self, path: str | Path, namespace: str | None = None) -> None:
        """Add a template search path.

        The first un-namespaced path becomes the base directory; later ones
        are ignored with a :class:`DuplicatePathWarning`.  Namespaced paths
        fall back to the base directory for templates they lack.
        """
        if not namespace and not self._engine.get_directory():
            self._engine.set_directory(path)
            return

        if not namespace:
            warnings.warn(
                "Cannot add duplicate un-namespaced path in Jinja template adapter",
                DuplicatePathWarning,
                stacklevel=2,
            )
            return

        self._engine.add_folder(namespace, path, fallback=True)

    def get_paths(self) -> list[TemplatePath]:
        """Return the base directory followed by every namespaced folder."""
        directory = self._engine.get_directory()
        paths = [TemplatePath(directory)] if directory else []
        for folder in self._engine.get_folders():
            paths.append(TemplatePath(folder.path, folder.name))
        return paths

    def get_engine(self) -> TemplateEngine:
        """Return the wrapped engine for configuration beyond this interface."""
        return self._engine
