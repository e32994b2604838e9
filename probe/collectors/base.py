"""
Classe de base pour tous les collecteurs de la sonde

Ce module définit l'interface commune que tous les collecteurs
doivent implémenter, ainsi que des utilitaires partagés.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Union

from ..core.models import CollectionResult, NOT_AVAILABLE


class BaseCollector(ABC):
    """
    Classe de base abstraite pour tous les collecteurs

    Un collecteur ne lève jamais d'exception vers l'appelant : en cas
    d'échec de lecture il journalise un avertissement et retourne la
    sentinelle de son type dans un CollectionResult.
    """

    description = "fait système"

    def __init__(self, source, logger):
        """
        Initialise le collecteur de base

        Args:
            source: Instance de SystemFactSource
            logger: Logger du collecteur principal
        """
        self.source = source
        self.logger = logger
        self.collector_name = self.__class__.__name__

    @abstractmethod
    def collect(self) -> CollectionResult:
        """
        Méthode principale de collecte - doit être implémentée par chaque collecteur

        Returns:
            CollectionResult: Valeur collectée et avertissement éventuel
        """
        pass

    def _safe_execute(self, func: Callable[[], Any], default_value: Any) -> CollectionResult:
        """
        Exécute une lecture de manière sécurisée avec gestion d'erreur

        Args:
            func: Fonction de lecture
            default_value: Sentinelle retournée en cas d'erreur

        Returns:
            CollectionResult: Résultat de la fonction ou sentinelle avec avertissement
        """
        try:
            return CollectionResult(func())
        except ImportError as e:
            return self._warn(f"Module système indisponible pour {self.description}: {e}", default_value)
        except Exception as e:
            return self._warn(f"Impossible de lire {self.description}: {e}", default_value)

    def _warn(self, message: str, value: Any) -> CollectionResult:
        self.logger.warning(message)
        return CollectionResult(value, warning=message)

    def _clean_string(self, value: Any) -> str:
        """
        Nettoie une valeur lue et la convertit en chaîne

        Args:
            value: Valeur brute (None, chaîne, nombre...)

        Returns:
            str: Chaîne nettoyée, "N/A" si vide
        """
        if value is None:
            return NOT_AVAILABLE

        value = str(value).strip()

        # Supprimer les caractères de contrôle et les espaces multiples
        value = ''.join(char for char in value if char.isprintable())
        value = re.sub(r'\s+', ' ', value)

        return value if value else NOT_AVAILABLE

    def _to_int(self, value: Any) -> Union[int, str]:
        """
        Convertit un code numérique WMI en entier

        Returns:
            int ou "N/A" si la valeur n'est pas numérique
        """
        try:
            return int(value)
        except (TypeError, ValueError):
            return NOT_AVAILABLE
