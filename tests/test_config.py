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

"""Tests for tplrender.config."""

from __future__ import annotations

import os

import pytest

from tplrender import JinjaRenderer, RendererSettings, TemplatePath, create_renderer


class TestFromEnv:
    def test_defaults(self):
        settings = RendererSettings.from_env({})
        assert settings.template_dir is None
        assert settings.template_ext == "tpl"
        assert settings.paths == {}
        assert settings.autoescape is False

    def test_reads_variables(self):
        env = {
            "TPLRENDER_TEMPLATE_DIR": "/srv/templates",
            "TPLRENDER_TEMPLATE_EXT": "html",
            "TPLRENDER_TEMPLATE_PATHS": os.pathsep.join(["emails=/srv/emails", " admin = /srv/admin "]),
            "TPLRENDER_AUTOESCAPE": "Yes",
        }
        settings = RendererSettings.from_env(env)
        assert settings.template_dir == "/srv/templates"
        assert settings.template_ext == "html"
        assert settings.paths == {"emails": "/srv/emails", "admin": "/srv/admin"}
        assert settings.autoescape is True

    @pytest.mark.parametrize("raw", ["emails", "=/srv/emails", "emails="])
    def test_malformed_paths(self, raw):
        with pytest.raises(ValueError, match="namespace=directory"):
            RendererSettings.from_env({"TPLRENDER_TEMPLATE_PATHS": raw})

    def test_uses_process_environment(self, monkeypatch):
        monkeypatch.setenv("TPLRENDER_TEMPLATE_DIR", "/from/env")
        assert RendererSettings.from_env().template_dir == "/from/env"


class TestCreateRenderer:
    def test_builds_configured_renderer(self, tmp_path):
        emails = tmp_path / "emails"
        emails.mkdir()
        (emails / "welcome.tpl").write_text("Hi {{ name }} from {{ site }}")

        settings = RendererSettings(
            template_dir=str(tmp_path),
            defaults={"site": "Example"},
            paths={"emails": str(emails)},
        )
        renderer = create_renderer(settings)

        assert isinstance(renderer, JinjaRenderer)
        assert renderer.get_paths() == [
            TemplatePath(str(tmp_path)),
            TemplatePath(str(emails), "emails"),
        ]
        assert renderer.render("emails::welcome", {"name": "Ada"}) == "Hi Ada from Example"

    def test_autoescape(self, tmp_path):
        (tmp_path / "t.tpl").write_text("{{ v }}")
        renderer = create_renderer(RendererSettings(template_dir=str(tmp_path), autoescape=True))
        assert renderer.render("t", {"v": "<i>"}) == "&lt;i&gt;"

    def test_defaults_to_environment(self, tmp_path, monkeypatch):
        (tmp_path / "page.txt").write_text("env page")
        monkeypatch.setenv("TPLRENDER_TEMPLATE_DIR", str(tmp_path))
        monkeypatch.setenv("TPLRENDER_TEMPLATE_EXT", "txt")
        monkeypatch.delenv("TPLRENDER_TEMPLATE_PATHS", raising=False)

        assert create_renderer().render("page") == "env page"
