"""
playercore - coeur de demarrage et d'arret d'un lecteur multimedia.

Detecte les capacites processeur, parse la ligne de commande, cree les
sous-systemes dans un ordre fixe, lance l'interface et demonte tout en
ordre inverse.
"""

__version__ = "0.1.0"
