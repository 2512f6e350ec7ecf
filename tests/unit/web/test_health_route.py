"""Tests de la route GET /api/health."""

import shutil

from fastapi.testclient import TestClient

from homeflix.web.app import create_app


class TestHealth:
    """Tests de l'etat de sante."""

    def test_sain(self, client, media_root):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["configLoaded"] is True
        assert body["mediaRoot"] == str(media_root)
        assert body["mediaRootExists"] is True
        assert "timestamp" in body
        assert "error" not in body

    def test_configuration_absente(self, container, library_file):
        library_file.unlink()

        with TestClient(create_app(container)) as client:
            response = client.get("/api/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "error"
        assert body["configLoaded"] is False
        assert body["error"] == f"Config file not found: {library_file}"

    def test_racine_media_absente(self, client, media_root):
        shutil.rmtree(media_root)

        response = client.get("/api/health")

        assert response.status_code == 503
        body = response.json()
        assert body["mediaRootExists"] is False
        assert body["error"] == f"Media root not found: {media_root}"

    def test_retour_a_la_normale_apres_reload(self, container, library_file):
        content = library_file.read_text(encoding="utf-8")
        library_file.unlink()

        with TestClient(create_app(container)) as client:
            assert client.get("/api/health").status_code == 503
            library_file.write_text(content, encoding="utf-8")
            container.catalog_store().reload()
            assert client.get("/api/health").status_code == 200
