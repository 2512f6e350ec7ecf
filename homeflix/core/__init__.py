"""
Couche domaine (core).

Contient les entités du catalogue, les ports (interfaces abstraites) et les exceptions métier.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, YAML).

Sous-packages :
- entities/ : Entités du catalogue (Episode, Season, SeriesCollection, MovieCollection, Catalog)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- exceptions : Taxonomie des erreurs du sous-système de diffusion
"""
