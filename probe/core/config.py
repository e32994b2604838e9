"""
Module de configuration pour la sonde d'inventaire

Ce module gère la configuration de la sonde, incluant :
- Lecture du fichier de configuration INI
- Validation des paramètres
- Valeurs par défaut par plateforme
"""

import os
import re
import sys
import configparser
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULT_OFFICE_PATTERN = "Microsoft Office|Microsoft 365"

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def default_destination() -> str:
    """
    Détermine le dossier de destination par défaut des rapports

    Returns:
        str: C:\\Reports sous Windows, ~/Reports ailleurs
    """
    if sys.platform == "win32":
        return "C:\\Reports"
    return str(Path.home() / "Reports")


class ProbeConfig:
    """
    Gestionnaire de configuration de la sonde

    Centralise le dossier d'export, les paramètres de logging et
    les filtres de collecte.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialise la configuration de la sonde

        Args:
            config_file: Chemin vers le fichier de configuration (optionnel)
        """
        self.config = configparser.ConfigParser(interpolation=None)
        self.config_file = config_file or self._get_default_config_path()

        self._set_defaults()
        self._load_config()

    def _get_default_config_path(self) -> str:
        """
        Détermine le chemin par défaut du fichier de configuration selon la plateforme

        Returns:
            str: Chemin vers le fichier de configuration
        """
        if sys.platform == "win32":
            return os.path.join(
                os.environ.get("PROGRAMFILES", "C:\\Program Files"),
                "Endpoint License Probe",
                "config",
                "probe.ini"
            )
        return "/etc/endpoint-license-probe/config.ini"

    def _set_defaults(self):
        """
        Définit les valeurs de configuration par défaut

        Utilisées si le fichier est absent ou incomplet.
        """
        self.config.add_section('export')
        self.config.set('export', 'destination', default_destination())

        self.config.add_section('collection')
        self.config.set('collection', 'office_pattern', DEFAULT_OFFICE_PATTERN)

        self.config.add_section('logging')
        self.config.set('logging', 'log_level', 'INFO')
        self.config.set('logging', 'log_file', self._get_default_log_path())
        self.config.set('logging', 'max_log_size', '10485760')  # 10MB
        self.config.set('logging', 'backup_count', '5')

    def _get_default_log_path(self) -> str:
        """
        Détermine le chemin par défaut des logs selon la plateforme

        Returns:
            str: Chemin vers le fichier de log
        """
        if sys.platform == "win32":
            return os.path.join(
                os.environ.get("PROGRAMDATA", "C:\\ProgramData"),
                "EndpointLicenseProbe",
                "logs",
                "probe.log"
            )
        return "/tmp/endpoint-license-probe.log"

    def _load_config(self):
        """
        Charge la configuration depuis le fichier

        Si le fichier n'existe pas ou est illisible, les valeurs par défaut
        restent en place.
        """
        try:
            if os.path.exists(self.config_file):
                self.config.read(self.config_file, encoding='utf-8')
                self.loaded_from_file = True
            else:
                self.loaded_from_file = False
        except (configparser.Error, OSError, UnicodeDecodeError) as e:
            print(f"Erreur lors du chargement de la configuration: {e}")
            print("Utilisation des valeurs par défaut")
            self.loaded_from_file = False

    def get(self, section: str, option: str, fallback: Any = None) -> str:
        """
        Récupère une valeur de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            fallback: Valeur par défaut si non trouvée

        Returns:
            str: Valeur de configuration
        """
        return self.config.get(section, option, fallback=fallback)

    def getboolean(self, section: str, option: str, fallback: bool = False) -> bool:
        return self.config.getboolean(section, option, fallback=fallback)

    def getint(self, section: str, option: str, fallback: int = 0) -> int:
        """
        Récupère une valeur entière de configuration

        Une valeur non numérique retombe sur la valeur par défaut.
        """
        try:
            return self.config.getint(section, option, fallback=fallback)
        except ValueError:
            return fallback

    def set(self, section: str, option: str, value: str):
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, option, str(value))

    def get_export_config(self) -> Dict[str, Any]:
        return {
            'destination': self.get('export', 'destination', default_destination())
        }

    def get_collection_config(self) -> Dict[str, Any]:
        return {
            'office_pattern': self.get('collection', 'office_pattern', DEFAULT_OFFICE_PATTERN)
        }

    def get_logging_config(self) -> Dict[str, Any]:
        """
        Récupère la configuration complète du logging

        Returns:
            dict: Configuration logging
        """
        return {
            'log_level': self.get('logging', 'log_level', 'INFO'),
            'log_file': self.get('logging', 'log_file', self._get_default_log_path()),
            'max_log_size': self.getint('logging', 'max_log_size', 10485760),
            'backup_count': self.getint('logging', 'backup_count', 5)
        }

    def validate(self) -> bool:
        """
        Valide la configuration courante

        Returns:
            bool: True si la configuration est valide, False sinon
        """
        errors = []

        log_level = self.get('logging', 'log_level', 'INFO')
        if log_level.upper() not in LOG_LEVELS:
            errors.append("Niveau de log invalide")

        try:
            re.compile(self.get('collection', 'office_pattern', DEFAULT_OFFICE_PATTERN))
        except re.error:
            errors.append("Motif de filtrage Office invalide (expression régulière)")

        if self.getint('logging', 'max_log_size', 0) <= 0:
            errors.append("Taille maximale de log invalide (doit être positive)")

        if self.getint('logging', 'backup_count', -1) < 0:
            errors.append("Nombre de sauvegardes de log invalide")

        if not self.get('export', 'destination'):
            errors.append("Dossier de destination vide")

        if errors:
            for error in errors:
                print(f"Erreur de configuration: {error}")
            return False

        return True
