"""
Couche application: detection des capacites, parsing des options,
textes d'aide, annulation par signaux et orchestration du cycle de vie.
"""
