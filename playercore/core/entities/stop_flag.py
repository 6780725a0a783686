"""
Drapeau d'arret cooperatif de l'interface.

Un seul bit, ecrit par le gestionnaire de signaux et lu par la boucle de
l'interface, sans verrou: l'affectation d'un attribut est atomique pour
l'interpreteur et le gestionnaire ne fait que le passer a True.
"""


class StopFlag:
    """Drapeau "die" observe par la boucle run() de l'interface."""

    __slots__ = ("_raised",)

    def __init__(self) -> None:
        self._raised = False

    def set(self) -> None:
        """Demande l'arret de la boucle."""
        self._raised = True

    def is_set(self) -> bool:
        """Vrai si l'arret a ete demande."""
        return self._raised

    def __bool__(self) -> bool:
        return self._raised

    def __repr__(self) -> str:
        return f"StopFlag(raised={self._raised})"
