"""
Services applicatifs (couche application).

Ce package contient :
- path_resolver : resolution confinee des chemins sous la racine media
- catalog_store : instantane du catalogue et rechargement atomique
- config_watcher : surveillance du fichier de bibliotheque
- streaming : diffusion video avec plages d'octets
- assets : localisation des images
"""
