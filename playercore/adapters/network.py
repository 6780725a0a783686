"""
Gestion des canaux reseau.

Le serveur de canaux est resolu a la creation; rejoindre un canal consiste a
lui envoyer une requete UDP. Tout echec leve SubsystemError: a la creation
l'orchestrateur desactive alors simplement la fonction.
"""

import errno
import socket
from typing import Optional

from loguru import logger

from playercore.config import Settings
from playercore.core.entities.config_store import ConfigStore
from playercore.core.ports.subsystems import IChannelNetwork, SubsystemError
from playercore.utils.constants import INPUT_CHANNEL_PORT, INPUT_CHANNEL_SERVER

REQUEST_PREFIX = "JOIN"


class ChannelNetwork(IChannelNetwork):
    """
    Client du serveur de canaux.

    Args :
        address : Adresse resolue du serveur (sockaddr)
        sock : Socket UDP deja creee pour cette adresse
    """

    def __init__(self, address: tuple, sock: socket.socket) -> None:
        self.address = address
        self._sock = sock
        self.channel: Optional[int] = None

    @classmethod
    def create(cls, store: ConfigStore, settings: Settings) -> "ChannelNetwork":
        """
        Resout le serveur de canaux et ouvre la socket.

        Le magasin (channel_server, channel_port) est prioritaire sur les
        Settings.
        """
        server = store.get_str(INPUT_CHANNEL_SERVER, settings.channel_server)
        port = store.get_int(INPUT_CHANNEL_PORT, settings.channel_port)

        if not server:
            raise SubsystemError("no channel server configured", code=errno.EDESTADDRREQ)
        if not 0 < port < 65536:
            raise SubsystemError(f"invalid channel port {port}", code=errno.EINVAL)

        try:
            infos = socket.getaddrinfo(server, port, type=socket.SOCK_DGRAM)
        except socket.gaierror as e:
            raise SubsystemError(
                f"cannot resolve channel server {server}: {e}", code=errno.EHOSTUNREACH
            ) from e

        family, sock_type, proto, _, address = infos[0]
        try:
            sock = socket.socket(family, sock_type, proto)
        except OSError as e:
            raise SubsystemError(f"cannot open channel socket: {e}", code=e.errno or errno.EIO) from e

        logger.debug(f"Serveur de canaux: {server}:{port}")
        return cls(address, sock)

    def join(self, channel: int) -> None:
        payload = f"{REQUEST_PREFIX} {channel}\n".encode("ascii")
        try:
            self._sock.sendto(payload, self.address)
        except OSError as e:
            raise SubsystemError(
                f"cannot join channel {channel}: {e}", code=e.errno or errno.EIO
            ) from e
        self.channel = channel
        logger.info(f"Canal {channel} rejoint")

    def destroy(self) -> None:
        self._sock.close()
