"""Tests des parametres de l'application (pydantic-settings)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from homeflix.config import Settings


class TestSettings:
    """Tests de Settings."""

    def test_valeurs_par_defaut(self, monkeypatch):
        for name in ("HOMEFLIX_MEDIA_ROOT", "HOMEFLIX_LIBRARY_CONFIG", "HOMEFLIX_LAN_ONLY"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.media_root == Path("/media")
        assert settings.library_config == Path("/data/library.yml")
        assert settings.lan_only is True
        assert settings.config_poll_interval == 1.0

    def test_variables_d_environnement(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOMEFLIX_MEDIA_ROOT", str(tmp_path))
        monkeypatch.setenv("HOMEFLIX_LAN_ONLY", "false")

        settings = Settings(_env_file=None)

        assert settings.media_root == tmp_path
        assert settings.lan_only is False

    def test_expansion_du_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = Settings(_env_file=None, media_root="~/films")
        assert settings.media_root == tmp_path / "films"

    def test_intervalle_de_surveillance_positif(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, config_poll_interval=0)
