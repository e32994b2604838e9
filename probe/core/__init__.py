"""
Module Core - Composants principaux de la sonde

Ce module contient :
- Configuration
- Logging
- Modèles de données
- Collecte du rapport
- Export des fichiers
"""
