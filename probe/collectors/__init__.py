"""
Package des collecteurs de faits de la sonde

Ce package contient :
- Le collecteur de base (classe abstraite)
- Les collecteurs d'identité, système, Office et licences
- Les sources de faits par plateforme
"""
