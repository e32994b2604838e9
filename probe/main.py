"""
Point d'entrée principal de la sonde d'inventaire

Collecte les informations d'identité, de système d'exploitation,
d'installations Office et de licences du poste, puis les exporte
sous <destination>/<hostname>/.
"""

import sys
import argparse
from typing import List, Optional

from probe import __version__
from probe.core.collector import EndpointCollector
from probe.core.config import ProbeConfig
from probe.core.exporter import ReportExporter
from probe.core.logger import ProbeLogger

HELP_FLAGS = ('-h', '--help', '-?')

HELP_TEXT = f"""\
Endpoint License Probe {__version__}

SYNOPSIS
    endpoint-license-probe [--destination PATH] [--help]

DESCRIPTION
    Reads the licensing and software facts of this Windows endpoint and
    writes them to report files. The run collects, in order:
      - the hostname and BIOS serial number
      - the operating system caption, version, architecture and build number
      - the installed Microsoft Office products (registry Uninstall keys)
      - the licensed products (SoftwareLicensingProduct with a partial key)
      - the OEM product key (SoftwareLicensingService, then the registry
        BackupProductKeyDefault value)

    A fact that cannot be read is replaced by "N/A", "Not Found" or "Error"
    and a warning is logged; the run always continues.

OPTIONS
    -d, --destination PATH
        Root folder of the reports. Files are written to PATH\\<hostname>\\.
        Default: the [export] destination setting of the configuration
        file, otherwise C:\\Reports (~/Reports on other platforms).

    -h, --help, -?
        Show this documentation and exit without collecting anything.

OUTPUT
    HostInfo.csv              Hostname, SerialNumber
    OperatingSystem.csv       Hostname, SerialNumber, OperatingSystem,
                              OSVersion, OSArchitecture, OSBuildNumber
    LicensedProducts.csv      Hostname, SerialNumber, Name, Description,
                              LicenseStatus, LicenseStatusDescription,
                              PartialProductKey, LicenseFamily,
                              ProductKeyChannel, IsKeyManagementServiceMachine
                              (not written when no licensed product is found)
    InstalledOffice.csv       Hostname, SerialNumber, DisplayName,
                              DisplayVersion, Publisher, InstallDate
                              (not written when no Office product is found)
    OEMProductKey.csv         Hostname, SerialNumber, OA3xOriginalProductKey,
                              OA3xOriginalProductKeyDescription,
                              OA3xOriginalProductKeyResult
    EndpointData_<hostname>.json
                              Complete report as a nested document

LICENSE STATUS
    0 Unlicensed, 1 Licensed, 2 Initial Grace Period,
    3 Additional Grace Period, 4 Non-Genuine Grace Period,
    5 Notification, 6 Extended Grace Period, other: Unknown Status

EXIT STATUS
    0  reports exported
    1  the output folder could not be created
    2  invalid arguments

EXAMPLES
    endpoint-license-probe
    endpoint-license-probe --destination \\\\fileserver\\inventory
"""


def wants_help(argv: List[str]) -> bool:
    return any(arg in HELP_FLAGS for arg in argv)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='endpoint-license-probe',
        description='Sonde d\'inventaire - Collecte des informations de licence du poste',
        add_help=False
    )

    parser.add_argument(
        '--destination', '-d',
        type=str,
        help='Dossier racine des rapports'
    )

    parser.add_argument(
        *HELP_FLAGS,
        dest='help',
        action='store_true',
        help='Affiche la documentation et quitte'
    )

    return parser


def run(destination: Optional[str], config: ProbeConfig, logger: ProbeLogger, source=None) -> int:
    """
    Collecte puis exporte le rapport du poste

    Args:
        destination: Dossier racine (None pour la valeur configurée)
        config: Instance de ProbeConfig
        logger: Instance de ProbeLogger
        source: SystemFactSource à utiliser (WindowsFactSource par défaut)

    Returns:
        int: Code de sortie du processus
    """
    app_logger = logger.get_logger()
    destination = destination or config.get_export_config()['destination']

    collector = EndpointCollector(config, logger, source)
    report = collector.collect()

    stats = collector.get_collection_stats()
    if stats['warnings_count']:
        app_logger.warning(f"Collecte terminée avec {stats['warnings_count']} avertissement(s):")
        for warning in stats['warnings']:
            app_logger.warning(f"  - {warning}")

    exporter = ReportExporter(logger)
    if not exporter.export(report, destination):
        app_logger.error(f"Échec de l'export pour le poste {report.hostname}")
        return 1

    if exporter.failed_artifacts:
        app_logger.warning(f"Artefacts non écrits: {', '.join(exporter.failed_artifacts)}")

    app_logger.info(f"Rapports du poste {report.hostname} disponibles dans {destination}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Point d'entrée principal avec gestion des arguments de ligne de commande
    """
    argv = sys.argv[1:] if argv is None else list(argv)

    # L'aide est traitée avant toute configuration, log ou collecte
    if wants_help(argv):
        print(HELP_TEXT)
        return 0

    args = build_parser().parse_args(argv)

    config = ProbeConfig()
    logger = ProbeLogger(config)
    logger.log_system_info()
    logger.log_config_info(config)

    if not config.validate():
        logger.warning("Configuration invalide, certaines valeurs par défaut peuvent être utilisées")

    try:
        return run(args.destination, config, logger)
    except KeyboardInterrupt:
        print("\nArrêt demandé par l'utilisateur")
        return 1


if __name__ == '__main__':
    sys.exit(main())
