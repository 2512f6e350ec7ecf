"""
Restriction d'acces au reseau local.

Middleware ASGI qui repond 403 a tout client dont l'adresse n'est ni locale
(loopback), ni privee (RFC 1918, ULA), ni lien-local. Une adresse client
illisible est refusee.
"""

import ipaddress
from typing import Optional

from fastapi.responses import JSONResponse
from loguru import logger
from starlette.types import ASGIApp, Receive, Scope, Send


def is_lan_address(host: Optional[str]) -> bool:
    """Verifie qu'une adresse client appartient au reseau local."""
    if not host:
        return False
    try:
        # Les adresses IPv6 lien-local peuvent porter un identifiant de zone (%eth0)
        address = ipaddress.ip_address(host.split("%", 1)[0])
    except ValueError:
        return False
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped
    return address.is_loopback or address.is_private or address.is_link_local


class LanOnlyMiddleware:
    """Refuse les requetes HTTP provenant de l'exterieur du reseau local."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            client = scope.get("client")
            host = client[0] if client else None
            if not is_lan_address(host):
                logger.warning(f"Client hors reseau local refuse: {host}")
                response = JSONResponse(
                    {"error": "Forbidden", "message": "Access restricted to the local network"},
                    status_code=403,
                )
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)
