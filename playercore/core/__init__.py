"""
Couche domaine (core).

Contient les entites, ports (interfaces abstraites) et objets valeur.
Cette couche n'a AUCUNE dependance vers l'infrastructure (loguru, signaux, reseau).

Sous-packages :
- entities/ : RootContext, ConfigStore, StopFlag
- ports/ : Contrats des sous-systemes et de la source CPUID
- value_objects/ : Capacites, reglages racine, demandes de sortie
"""
