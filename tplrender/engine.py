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

"""Jinja2 template engine with a base directory and namespaced folders.

Template identifiers take two forms:

* ``"profile"`` — resolved against the base directory
* ``"emails::welcome"`` — resolved against the folder registered under
  the ``emails`` namespace

The configured file extension is appended to the identifier, so with the
default ``"tpl"`` extension ``"emails::welcome"`` maps to
``<emails folder>/welcome.tpl``.  A folder registered with ``fallback=True``
defers to the base directory for templates it does not contain.

Default data can be shared by every template or scoped to individual
template names; data passed at render time always wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import BaseLoader, Environment, TemplateNotFound
from jinja2.loaders import split_template_path

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "::"


@dataclass(frozen=True)
class Folder:
    """A namespaced template directory."""

    name: str
    path: str
    fallback: bool = False


class _NamespacedLoader(BaseLoader):
    """Jinja2 loader that resolves identifiers through the owning engine."""

    def __init__(self, engine: TemplateEngine) -> None:
        self.engine = engine

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, Callable[[], bool]]:
        path = self.engine.resolve_path(template)
        source = path.read_text(encoding="utf-8")
        mtime = path.stat().st_mtime

        def uptodate() -> bool:
            # A file appearing earlier in the lookup order also invalidates.
            try:
                return (
                    self.engine.resolve_path(template) == path
                    and path.stat().st_mtime == mtime
                )
            except (TemplateNotFound, OSError):
                return False

        return source, str(path), uptodate


class TemplateEngine:
    """Load and render Jinja2 templates from a base directory and folders.

    Args:
        directory: Base directory for un-namespaced templates.  May be
            ``None`` and set later via :meth:`set_directory`.
        file_extension: Extension appended to every identifier, without the
            leading dot.  ``None`` uses identifiers verbatim.
        autoescape: Enable Jinja2 HTML autoescaping.
    """

    def __init__(
        self,
        directory: str | Path | None = None,
        file_extension: str | None = "tpl",
        *,
        autoescape: bool = False,
    ) -> None:
        self._directory = str(directory) if directory else None
        self._file_extension = file_extension
        self._folders: dict[str, Folder] = {}
        self._shared_data: dict[str, Any] = {}
        self._template_data: dict[str, dict[str, Any]] = {}
        self._env = Environment(
            loader=_NamespacedLoader(self),
            keep_trailing_newline=True,
            autoescape=autoescape,
        )

    @property
    def environment(self) -> Environment:
        """The underlying Jinja2 environment."""
        return self._env

    # --- Directory & extension ---

    def get_directory(self) -> str | None:
        return self._directory

    def set_directory(self, directory: str | Path | None) -> None:
        self._directory = str(directory) if directory else None
        self._clear_cache()
        logger.debug("Template directory set to %s", self._directory)

    def get_file_extension(self) -> str | None:
        return self._file_extension

    def set_file_extension(self, file_extension: str | None) -> None:
        self._file_extension = file_extension
        self._clear_cache()

    # --- Folders ---

    def add_folder(self, name: str, path: str | Path, fallback: bool = False) -> None:
        """Register *path* under the namespace *name*.

        Raises :class:`ValueError` if *name* is empty or already registered.
        """
        if not name:
            raise ValueError("Folder namespace must be a non-empty string")
        if name in self._folders:
            raise ValueError(f"The template folder {name!r} is already being used")
        self._folders[name] = Folder(name=name, path=str(path), fallback=fallback)
        logger.debug("Registered template folder %s -> %s", name, path)

    def remove_folder(self, name: str) -> None:
        """Unregister the namespace *name*.  Raises :class:`KeyError` if unknown."""
        if name not in self._folders:
            raise KeyError(f"The template folder {name!r} was not found")
        del self._folders[name]
        self._clear_cache()

    def get_folders(self) -> list[Folder]:
        """Return registered folders in registration order."""
        return list(self._folders.values())

    # --- Data ---

    def add_data(
        self,
        data: Mapping[str, Any],
        templates: str | Iterable[str] | None = None,
    ) -> None:
        """Add default data to all templates, or to the named *templates*."""
        if templates is None:
            self._shared_data.update(data)
            return
        if isinstance(templates, str):
            templates = [templates]
        for template in templates:
            self._template_data.setdefault(template, {}).update(data)

    def get_data(self, template: str | None = None) -> dict[str, Any]:
        """Return shared data merged with *template*'s own defaults."""
        merged = dict(self._shared_data)
        if template is not None:
            merged.update(self._template_data.get(template, {}))
        return merged

    # --- Functions ---

    def register_function(self, name: str, func: Callable[..., Any]) -> None:
        """Expose *func* to every template under *name*."""
        if self.does_function_exist(name):
            raise ValueError(f"The template function {name!r} is already registered")
        if not callable(func):
            raise ValueError(f"The template function {name!r} must be callable")
        self._env.globals[name] = func

    def get_function(self, name: str) -> Callable[..., Any]:
        if not self.does_function_exist(name):
            raise KeyError(f"The template function {name!r} was not found")
        return self._env.globals[name]

    def does_function_exist(self, name: str) -> bool:
        return callable(self._env.globals.get(name))

    # --- Resolution & rendering ---

    def resolve_path(self, name: str) -> Path:
        """Map a template identifier to an existing file.

        Raises ``jinja2.TemplateNotFound`` if the identifier is malformed,
        its namespace is unknown, or no matching file exists.
        """
        namespace, template = self._parse_name(name)
        filename = self._filename(template)

        if namespace is None:
            if self._directory is None:
                raise TemplateNotFound(name, "The default template directory has not been defined")
            return self._existing_file(name, Path(self._directory), filename)

        folder = self._folders.get(namespace)
        if folder is None:
            raise TemplateNotFound(name, f"The template folder {namespace!r} was not found")
        try:
            return self._existing_file(name, Path(folder.path), filename)
        except TemplateNotFound:
            if not folder.fallback or self._directory is None:
                raise
        return self._existing_file(name, Path(self._directory), filename)

    def exists(self, name: str) -> bool:
        """Check whether *name* resolves to a template file."""
        try:
            self.resolve_path(name)
            return True
        except TemplateNotFound:
            return False

    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render *name* with its default data overlaid by *data*.

        Raises ``jinja2.TemplateNotFound`` if the template does not exist.
        """
        variables = self.get_data(name)
        if data:
            variables.update(data)
        tmpl = self._env.get_template(name)
        return tmpl.render(variables)

    # --- Internals ---

    def _parse_name(self, name: str) -> tuple[str | None, str]:
        parts = name.split(NAMESPACE_SEPARATOR)
        if len(parts) == 1 and parts[0]:
            return None, parts[0]
        if len(parts) == 2 and all(parts):
            return parts[0], parts[1]
        raise TemplateNotFound(name, f"Invalid template identifier {name!r}")

    def _filename(self, template: str) -> list[str]:
        if self._file_extension:
            template = f"{template}.{self._file_extension}"
        return split_template_path(template)

    @staticmethod
    def _existing_file(name: str, directory: Path, pieces: list[str]) -> Path:
        path = directory.joinpath(*pieces)
        try:
            found = path.is_file()
        except OSError:
            found = False
        if not found:
            raise TemplateNotFound(name)
        return path

    def _clear_cache(self) -> None:
        if self._env.cache is not None:
            self._env.cache.clear()
