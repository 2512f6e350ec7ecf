"""
Routes HTTP de HomeFlix.

- stream : diffusion video (plages d'octets)
- asset : images (affiches, vignettes, fonds)
- health : etat du catalogue et de la racine media
- library : lecture du catalogue en JSON
"""
