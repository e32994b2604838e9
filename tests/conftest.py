"""
Endpoint License Probe : fixtures communes à tous les tests unitaires
"""

import logging
import pytest

from probe.collectors.platform.source import SystemFactSource
from probe.core.config import ProbeConfig
from probe.core.logger import LOGGER_NAME, ProbeLogger


class StaticFactSource(SystemFactSource):
    """
    Source de faits aux valeurs fixes

    Une valeur qui est une instance d'exception est levée au lieu d'être
    retournée. Chaque appel est enregistré dans `calls`, dans l'ordre.
    """

    DEFAULTS = {
        'hostname': 'WKS01',
        'serial_number': 'SN123',
        'operating_system': {
            'Caption': 'Windows 11 Pro',
            'Version': '10.0.22631',
            'OSArchitecture': '64-bit',
            'BuildNumber': '22631',
        },
        'uninstall_entries': [],
        'licensed_products': [{
            'Name': 'Windows 11 Pro',
            'Description': 'Windows(R) Operating System, OEM_DM channel',
            'LicenseStatus': 1,
            'PartialProductKey': '3V66T',
            'LicenseFamily': 'Professional',
            'ProductKeyChannel': 'OEM:DM',
            'IsKeyManagementServiceMachine': 0,
        }],
        'oa3x_product_key': {'OA3xOriginalProductKey': '', 'OA3xOriginalProductKeyDescription': ''},
        'backup_product_key': 'BACKP-KEY12-34567-89ABC-DEFGH',
    }

    def __init__(self, **facts):
        self.facts = dict(self.DEFAULTS, **facts)
        self.calls = []

    def _fact(self, name):
        self.calls.append(name)
        value = self.facts[name]
        if isinstance(value, Exception):
            raise value
        return value

    def get_hostname(self):
        return self._fact('hostname')

    def get_bios_serial_number(self):
        return self._fact('serial_number')

    def get_operating_system(self):
        return self._fact('operating_system')

    def get_uninstall_entries(self):
        return self._fact('uninstall_entries')

    def get_licensed_products(self):
        return self._fact('licensed_products')

    def get_oa3x_product_key(self):
        return self._fact('oa3x_product_key')

    def get_backup_product_key(self):
        return self._fact('backup_product_key')


@pytest.fixture(autouse=True)
def reset_probe_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def static_source() -> StaticFactSource:
    return StaticFactSource()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'probe.ini'
    path.write_text(
        "[export]\n"
        f"destination = {tmp_path / 'reports'}\n"
        "\n"
        "[logging]\n"
        "log_level = DEBUG\n"
        f"log_file = {tmp_path / 'logs' / 'probe.log'}\n",
        encoding='utf-8'
    )
    return path


@pytest.fixture
def probe_config(config_file) -> ProbeConfig:
    return ProbeConfig(str(config_file))


@pytest.fixture
def probe_logger(probe_config) -> ProbeLogger:
    return ProbeLogger(probe_config)


@pytest.fixture
def make_source():
    def _make_source(**facts) -> StaticFactSource:
        return StaticFactSource(**facts)
    return _make_source
