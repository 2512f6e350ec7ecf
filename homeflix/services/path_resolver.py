"""
Resolution des chemins relatifs sous la racine media.

Transforme un chemin fourni par un client (ou derive du catalogue) en chemin
absolu canonique confine a la racine. Aucune operation ne touche le systeme
de fichiers : la canonicalisation est purement lexicale (``.`` et ``..``).

Un chemin refuse est signale par None, jamais par une exception : les
tentatives de traversee sont des entrees attendues, pas un etat anormal.
"""

import os
import re
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

# Un '%' qui n'est pas suivi de deux chiffres hexadecimaux
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_path(raw: str) -> Optional[str]:
    """
    Decode un chemin encode en pourcentage.

    Retourne None si l'encodage est malforme (sequence '%' invalide
    ou octets qui ne forment pas de l'UTF-8).
    """
    if _MALFORMED_ESCAPE.search(raw):
        return None
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError:
        return None


def resolve_path(
    root: str | os.PathLike, relative_input: str, *, decode: bool = True
) -> Optional[Path]:
    """
    Resout un chemin relatif sous une racine sans permettre d'en sortir.

    Args:
        root: Repertoire racine (la racine media)
        relative_input: Chemin relatif, eventuellement encode en pourcentage
        decode: Decoder l'encodage pourcentage avant la resolution. Les chemins
            derives du catalogue sont deja en clair et passent decode=False.

    Returns:
        Le chemin absolu canonique si il est egal a la racine ou strictement
        a l'interieur, None sinon (traversee, chemin absolu injecte,
        encodage malforme, octet nul).
    """
    if not isinstance(relative_input, str):
        return None

    candidate = decode_path(relative_input) if decode else relative_input
    if candidate is None or "\x00" in candidate:
        return None

    canonical_root = os.path.abspath(os.fspath(root))
    resolved = os.path.normpath(os.path.join(canonical_root, candidate))

    if resolved == canonical_root:
        return Path(resolved)

    # La racine "/" se termine deja par le separateur
    prefix = canonical_root if canonical_root.endswith(os.sep) else canonical_root + os.sep
    if not resolved.startswith(prefix):
        return None
    return Path(resolved)


def is_confined(relative: str) -> bool:
    """
    Verifie lexicalement qu'un chemin de configuration reste sous sa racine.

    Un chemin absolu, ou dont la forme normalisee commence par '..', est refuse.
    """
    if "\x00" in relative or os.path.isabs(relative):
        return False
    normalized = os.path.normpath(relative)
    return normalized != os.pardir and not normalized.startswith(os.pardir + os.sep)
