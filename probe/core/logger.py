"""
Module de logging pour la sonde d'inventaire

Ce module fournit un système de logging centralisé avec :
- Rotation automatique du fichier de log
- Sortie console pour l'opérateur
- Formatage cohérent
"""

import os
import sys
import logging
import logging.handlers

LOGGER_NAME = 'EndpointLicenseProbe'


class ProbeLogger:
    """
    Gestionnaire de logging de la sonde

    Configure un handler fichier avec rotation et un handler console.
    Tous les avertissements des collecteurs passent par ici.
    """

    def __init__(self, config=None):
        """
        Initialise le système de logging

        Args:
            config: Instance de ProbeConfig pour récupérer les paramètres de log
        """
        self.config = config
        self.logger = logging.getLogger(LOGGER_NAME)

        # Éviter la duplication si déjà configuré
        if not self.logger.handlers:
            self._setup_logging()

    def _setup_logging(self):
        """
        Configure le niveau, le format et les handlers fichier et console
        """
        if self.config:
            logging_config = self.config.get_logging_config()
            log_level_str = logging_config['log_level']
            log_file = logging_config['log_file']
            max_size = logging_config['max_log_size']
            backup_count = logging_config['backup_count']
        else:
            log_level_str = 'INFO'
            log_file = self._get_default_log_file()
            max_size = 10485760  # 10MB
            backup_count = 5

        log_level = getattr(logging, log_level_str.upper(), logging.INFO)
        self.logger.setLevel(log_level)

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        try:
            log_dir = os.path.dirname(log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=max_size,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        except OSError as e:
            print(f"Erreur lors de la configuration du logging fichier: {e}")

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(fmt='%(levelname)s - %(message)s'))
        self.logger.addHandler(console_handler)

        self.logger.debug("Système de logging initialisé")

    def _get_default_log_file(self) -> str:
        if sys.platform == "win32":
            return os.path.join(
                os.environ.get("TEMP", "C:\\temp"),
                "endpoint-license-probe.log"
            )
        return "/tmp/endpoint-license-probe.log"

    def get_logger(self) -> logging.Logger:
        return self.logger

    def debug(self, message: str):
        """Log un message de niveau DEBUG"""
        self.logger.debug(message)

    def info(self, message: str):
        """Log un message de niveau INFO"""
        self.logger.info(message)

    def warning(self, message: str):
        """Log un message de niveau WARNING"""
        self.logger.warning(message)

    def error(self, message: str):
        """Log un message de niveau ERROR"""
        self.logger.error(message)

    def exception(self, message: str):
        """
        Log une exception avec sa stack trace

        Args:
            message: Message descriptif de l'erreur
        """
        self.logger.exception(message)

    def log_system_info(self):
        """
        Log les informations d'exécution de base au démarrage
        """
        self.debug(f"Plateforme: {sys.platform}")
        self.debug(f"Version Python: {sys.version}")
        self.debug(f"Répertoire de travail: {os.getcwd()}")

    def log_config_info(self, config):
        """
        Log la configuration effective

        Args:
            config: Instance de ProbeConfig
        """
        self.debug("=== Configuration de la sonde ===")
        self.debug(f"Fichier: {config.config_file}")
        for section, values in (
            ('Export', config.get_export_config()),
            ('Collection', config.get_collection_config()),
            ('Logging', config.get_logging_config()),
        ):
            for key, value in values.items():
                self.debug(f"{section}.{key}: {value}")

