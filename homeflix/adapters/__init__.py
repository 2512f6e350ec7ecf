"""
Adaptateurs (couche infrastructure).

Implementations concretes des ports du domaine :
- file_system : acces reel au systeme de fichiers
- yaml_catalog : lecture et validation du fichier de bibliotheque YAML
"""
