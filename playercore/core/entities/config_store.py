"""
Magasin de configuration du processus.

Table cle/valeur (chaines) remplie pendant la phase de configuration a partir
de l'environnement pre-existant puis de la ligne de commande, et lue ensuite
par les sous-systemes. La derniere ecriture gagne; aucune entree n'est
supprimee en fonctionnement normal.
"""

from collections.abc import Iterator, Mapping
from typing import Optional


class ConfigStore:
    """
    Table de configuration cle -> valeur.

    Les valeurs sont toujours stockees sous forme de chaines. Deux accesseurs
    derives existent: get_str et get_int (avec valeur par defaut).

    Utilisation :
        store = ConfigStore.from_environ(os.environ, prefix="PLAYER_")
        store.put_str("width", "800")
        store.get_int("width", 720)  # -> 800
    """

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    @classmethod
    def from_environ(cls, environ: Mapping[str, str], prefix: str) -> "ConfigStore":
        """
        Cree un magasin a partir des variables d'environnement prefixees.

        PLAYER_WIDTH=800 devient l'entree "width" -> "800".

        Args :
            environ : Environnement du processus (ou un substitut pour les tests)
            prefix : Prefixe des variables retenues (insensible a la casse)

        Retourne :
            Un nouveau ConfigStore
        """
        upper_prefix = prefix.upper()
        entries = {
            name[len(prefix):].lower(): value
            for name, value in environ.items()
            if name.upper().startswith(upper_prefix) and len(name) > len(prefix)
        }
        return cls(entries)

    def put_str(self, key: str, value: str) -> None:
        """Ecrit une valeur chaine."""
        self._entries[key] = str(value)

    def put_int(self, key: str, value: int) -> None:
        """Ecrit une valeur entiere sous sa forme decimale."""
        self._entries[key] = str(int(value))

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Retourne la valeur chaine, ou default si la cle est absente."""
        return self._entries.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        """
        Retourne la valeur entiere d'une cle.

        La valeur entiere doit etre consommee en totalite (prefixes 0x et 0
        acceptes pour l'hexadecimal et l'octal), sinon default est retourne.
        """
        raw = self._entries.get(key)
        if raw is None:
            return default
        parsed = parse_c_integer(raw)
        return default if parsed is None else parsed

    def as_dict(self) -> dict[str, str]:
        """Copie des entrees (pour comparaison et affichage)."""
        return dict(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ConfigStore({self._entries!r})"


def parse_c_integer(text: str) -> Optional[int]:
    """
    Parse un entier avec detection de base (decimal, 0x hexa, 0 octal).

    Les espaces en tete et un signe sont acceptes; tout caractere restant
    apres les chiffres invalide la valeur.

    Retourne :
        L'entier, ou None si la chaine n'est pas entierement consommee
    """
    body = text.lstrip()
    if not body:
        return None

    sign = 1
    if body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]

    if body[:2].lower() == "0x":
        base, digits = 16, body[2:]
    elif len(body) > 1 and body[0] == "0":
        base, digits = 8, body[1:]
    else:
        base, digits = 10, body

    if not digits or not all(_digit_value(ch) < base for ch in digits):
        return None
    return sign * int(digits, base)


def parse_leading_integer(text: str) -> int:
    """
    Parse le prefixe decimal d'une chaine, 0 si aucun chiffre.

    Les espaces en tete et un signe sont acceptes, la suite est ignoree:
    "12abc" -> 12, "abc" -> 0.
    """
    body = text.lstrip()
    sign = 1
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]

    end = 0
    while end < len(body) and body[end].isascii() and body[end].isdigit():
        end += 1
    return sign * int(body[:end]) if end else 0


def _digit_value(ch: str) -> int:
    if ch.isascii() and ch.isdigit():
        return ord(ch) - ord("0")
    if ch.isascii() and ch.isalpha():
        return ord(ch.lower()) - ord("a") + 10
    return 99
