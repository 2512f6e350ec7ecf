"""Tests du resolveur de chemins confines a la racine media."""

import os
from pathlib import Path

import pytest

from homeflix.services.path_resolver import decode_path, is_confined, resolve_path

ROOT = "/srv/media"


class TestResolvePath:
    """Tests de resolve_path (pur, sans acces disque)."""

    @pytest.mark.parametrize("relative", ["", "."])
    def test_chemin_vide_ou_point_retourne_la_racine(self, relative):
        """'' et '.' designent la racine elle-meme."""
        assert resolve_path(ROOT, relative) == Path(ROOT)

    def test_chemin_interne(self):
        """Un chemin relatif simple est resolu sous la racine."""
        result = resolve_path(ROOT, "Series/Breaking Bad/Season 01/ep.mp4")
        assert result == Path("/srv/media/Series/Breaking Bad/Season 01/ep.mp4")

    def test_segments_point_point_internes_normalises(self):
        """Un '..' qui reste sous la racine est accepte et normalise."""
        assert resolve_path(ROOT, "posters/../thumbs/./a.jpg") == Path("/srv/media/thumbs/a.jpg")

    @pytest.mark.parametrize(
        "relative",
        [
            "..",
            "../etc/passwd",
            "posters/../../etc/passwd",
            "a/b/../../../secret",
            "%2e%2e/etc/passwd",
            "%2E%2E%2Fetc%2Fpasswd",
            "..%2f..%2fetc%2fpasswd",
            "posters%2F..%2F..%2Fsecret",
        ],
    )
    def test_traversee_refusee(self, relative):
        """Toute remontee au-dessus de la racine (encodee ou non) est refusee."""
        assert resolve_path(ROOT, relative) is None

    @pytest.mark.parametrize("relative", ["/etc/passwd", "%2Fetc%2Fpasswd"])
    def test_chemin_absolu_injecte_refuse(self, relative):
        """Un chemin absolu remplace la racine dans join : il doit etre refuse."""
        assert resolve_path(ROOT, relative) is None

    def test_prefixe_homonyme_refuse(self):
        """'/srv/media-private' commence par la racine mais n'est pas dedans."""
        assert resolve_path(ROOT, "../media-private/film.mp4") is None

    def test_chemin_absolu_interne_accepte(self):
        """Un chemin absolu qui pointe sous la racine reste confine."""
        assert resolve_path(ROOT, "/srv/media/posters/a.jpg") == Path("/srv/media/posters/a.jpg")

    def test_decodage_pourcentage(self):
        """L'entree est decodee avant la resolution."""
        assert resolve_path(ROOT, "Breaking%20Bad/ep%201.mp4") == Path(
            "/srv/media/Breaking Bad/ep 1.mp4"
        )

    @pytest.mark.parametrize("relative", ["%zz/film.mp4", "film%", "%E9t%E9.jpg", "a%00b"])
    def test_encodage_malforme_refuse(self, relative):
        """Sequence '%' invalide, UTF-8 invalide ou octet nul : refus, jamais d'exception."""
        assert resolve_path(ROOT, relative) is None

    def test_sans_decodage_le_pourcentage_est_litteral(self):
        """decode=False conserve les '%' des noms de fichiers du catalogue."""
        assert resolve_path(ROOT, "100%.mp4", decode=False) == Path("/srv/media/100%.mp4")

    def test_entree_non_textuelle_refusee(self):
        """La fonction est totale : une entree non str est refusee."""
        assert resolve_path(ROOT, None) is None  # type: ignore[arg-type]

    def test_racine_relative_canonicalisee(self, tmp_path, monkeypatch):
        """Une racine relative est rendue absolue depuis le repertoire courant."""
        monkeypatch.chdir(tmp_path)
        expected = Path(os.getcwd()) / "media" / "a.jpg"
        assert resolve_path("media", "a.jpg") == expected

    def test_racine_systeme(self):
        """Avec '/' comme racine, tout chemin absolu normalise est interne."""
        assert resolve_path("/", "etc/hosts") == Path("/etc/hosts")


class TestDecodePath:
    """Tests du decodage pourcentage."""

    def test_decode_utf8(self):
        assert decode_path("%C3%A9t%C3%A9.jpg") == "été.jpg"

    def test_double_encodage_decode_une_seule_fois(self):
        assert decode_path("%252e%252e") == "%2e%2e"


class TestIsConfined:
    """Tests de la verification lexicale des chemins de configuration."""

    @pytest.mark.parametrize("relative", ["", "Series/BB", "a/../b", "posters/x.jpg"])
    def test_chemins_relatifs_acceptes(self, relative):
        assert is_confined(relative) is True

    @pytest.mark.parametrize("relative", ["/abs/path", "..", "../x", "a/../../x"])
    def test_chemins_sortants_refuses(self, relative):
        assert is_confined(relative) is False
