"""
HomeFlix - Serveur multimedia personnel.

Ce package presente un catalogue de collections video (series et films) decrit
par un fichier YAML, et diffuse les fichiers video et images depuis une racine
media privee via HTTP.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites du catalogue, ports, exceptions)
- services/ : Couche application (resolution de chemins, catalogue, surveillance, streaming)
- adapters/ : Couche infrastructure (systeme de fichiers, chargement YAML)
- web/ : Interface HTTP (FastAPI)
"""

__version__ = "0.1.0"
