"""
Endpoint License Probe : tests unitaires de l'exporteur de rapports
"""

import csv
import json
import pytest

from probe.core.collector import EndpointCollector
from probe.core.exporter import ReportExporter, safe_path_name
from probe.core.models import (
    EndpointReport,
    HostIdentity,
    LicensedProduct,
    OEMProductKeyInfo,
    OfficeInstallation,
    OperatingSystemInfo,
)


def read_rows(path):
    with open(path, newline='', encoding='utf-8') as f:
        return list(csv.DictReader(f))


@pytest.fixture
def full_report() -> EndpointReport:
    return EndpointReport(
        identity=HostIdentity('WKS02', 'PF3ABCDE'),
        operating_system=OperatingSystemInfo('Windows 10 Pro', '10.0.19045', '64-bit', '19045'),
        installed_office=[
            OfficeInstallation('Microsoft Office Professional Plus 2019', '16.0.10827.20138',
                               'Microsoft Corporation', '20240102'),
        ],
        licensed_products=[
            LicensedProduct('Windows 10 Pro', 'Windows(R) Operating System, RETAIL channel', 1,
                            'T83GX', 'Professional', 'Retail', 0),
            LicensedProduct('Office 19, Office19ProPlus2019VL_KMS_Client_AE edition',
                            'Office 19, VOLUME_KMSCLIENT channel', 2, '6MWKP',
                            'Office19ProPlus2019VL_KMS_Client_AE', 'Volume:GVLK', 0),
        ],
        oem_product_key=OEMProductKeyInfo(
            'ABC-123', '[4.0] Professional OEM:DM',
            'OA3x Original Product Key retrieved successfully from SoftwareLicensingService'),
    )


@pytest.fixture
def exporter(probe_logger) -> ReportExporter:
    return ReportExporter(probe_logger)


def test_export_writes_all_artifacts(exporter, full_report, tmp_path):
    assert exporter.export(full_report, tmp_path) is True

    host_dir = tmp_path / 'WKS02'
    assert sorted(p.name for p in host_dir.iterdir()) == [
        'EndpointData_WKS02.json',
        'HostInfo.csv',
        'InstalledOffice.csv',
        'LicensedProducts.csv',
        'OEMProductKey.csv',
        'OperatingSystem.csv',
    ]
    assert exporter.failed_artifacts == []
    assert exporter.skipped_artifacts == []
    assert len(exporter.written_files) == 6


def test_export_csv_columns_and_rows(exporter, full_report, tmp_path):
    exporter.export(full_report, tmp_path)
    host_dir = tmp_path / 'WKS02'

    assert read_rows(host_dir / 'OperatingSystem.csv') == [{
        'Hostname': 'WKS02', 'SerialNumber': 'PF3ABCDE', 'OperatingSystem': 'Windows 10 Pro',
        'OSVersion': '10.0.19045', 'OSArchitecture': '64-bit', 'OSBuildNumber': '19045',
    }]

    products = read_rows(host_dir / 'LicensedProducts.csv')
    assert list(products[0]) == [
        'Hostname', 'SerialNumber', 'Name', 'Description', 'LicenseStatus',
        'LicenseStatusDescription', 'PartialProductKey', 'LicenseFamily',
        'ProductKeyChannel', 'IsKeyManagementServiceMachine',
    ]
    assert [(p['LicenseStatus'], p['LicenseStatusDescription']) for p in products] == [
        ('1', 'Licensed'), ('2', 'Initial Grace Period')
    ]
    assert all(p['Hostname'] == 'WKS02' and p['SerialNumber'] == 'PF3ABCDE' for p in products)

    oem = read_rows(host_dir / 'OEMProductKey.csv')
    assert oem == [{
        'Hostname': 'WKS02', 'SerialNumber': 'PF3ABCDE', 'OA3xOriginalProductKey': 'ABC-123',
        'OA3xOriginalProductKeyDescription': '[4.0] Professional OEM:DM',
        'OA3xOriginalProductKeyResult':
            'OA3x Original Product Key retrieved successfully from SoftwareLicensingService',
    }]

    raw = (host_dir / 'HostInfo.csv').read_bytes()
    assert raw == b'"Hostname","SerialNumber"\r\n"WKS02","PF3ABCDE"\r\n'


def test_export_json_document(exporter, full_report, tmp_path):
    exporter.export(full_report, tmp_path)

    with open(tmp_path / 'WKS02' / 'EndpointData_WKS02.json', encoding='utf-8') as f:
        document = json.load(f)

    assert document == full_report.to_dict()
    assert document['LicensedProducts'][1]['LicenseStatusDescription'] == 'Initial Grace Period'


def test_export_is_idempotent(exporter, full_report, tmp_path):
    exporter.export(full_report, tmp_path)
    host_dir = tmp_path / 'WKS02'
    first = {p.name: p.read_bytes() for p in host_dir.iterdir()}

    exporter.export(full_report, tmp_path)
    second = {p.name: p.read_bytes() for p in host_dir.iterdir()}

    assert first == second


def test_export_skips_empty_tables(exporter, tmp_path, caplog):
    report = EndpointReport(identity=HostIdentity('WKS03', 'N/A'))

    assert exporter.export(report, tmp_path) is True

    host_dir = tmp_path / 'WKS03'
    assert not (host_dir / 'LicensedProducts.csv').exists()
    assert not (host_dir / 'InstalledOffice.csv').exists()
    assert exporter.skipped_artifacts == ['LicensedProducts', 'InstalledOffice']
    assert "Aucune donnée pour LicensedProducts" in caplog.text

    document = json.loads((host_dir / 'EndpointData_WKS03.json').read_text(encoding='utf-8'))
    assert document['LicensedProducts'] == []
    assert document['InstalledOffice'] == []
    assert document['OEMProductKey']['OA3xOriginalProductKey'] == 'Not Found'


def test_export_directory_failure_is_fatal(exporter, full_report, tmp_path, caplog):
    (tmp_path / 'WKS02').write_text('not a directory')

    assert exporter.export(full_report, tmp_path) is False

    assert exporter.written_files == []
    assert "Impossible de créer le dossier de sortie" in caplog.text


def test_export_artifact_failure_does_not_stop_others(exporter, full_report, tmp_path, caplog):
    host_dir = tmp_path / 'WKS02'
    (host_dir / 'HostInfo.csv').mkdir(parents=True)

    assert exporter.export(full_report, tmp_path) is True

    assert exporter.failed_artifacts == ['HostInfo']
    assert (host_dir / 'OperatingSystem.csv').exists()
    assert (host_dir / 'OEMProductKey.csv').exists()
    assert (host_dir / 'EndpointData_WKS02.json').exists()
    assert "Échec de l'écriture" in caplog.text


def test_end_to_end_scenario(probe_config, probe_logger, exporter, static_source, tmp_path):
    report = EndpointCollector(probe_config, probe_logger, static_source).collect()

    assert exporter.export(report, tmp_path) is True

    host_dir = tmp_path / 'WKS01'
    assert read_rows(host_dir / 'HostInfo.csv') == [{'Hostname': 'WKS01', 'SerialNumber': 'SN123'}]

    products = read_rows(host_dir / 'LicensedProducts.csv')
    assert len(products) == 1
    assert products[0]['Name'] == 'Windows 11 Pro'
    assert products[0]['LicenseStatusDescription'] == 'Licensed'

    assert not (host_dir / 'InstalledOffice.csv').exists()

    oem = read_rows(host_dir / 'OEMProductKey.csv')
    assert oem[0]['OA3xOriginalProductKey'] == 'BACKP-KEY12-34567-89ABC-DEFGH'
    assert oem[0]['OA3xOriginalProductKeyResult'] == \
        'OA3x Original Product Key retrieved successfully from registry (BackupProductKeyDefault)'

    document = json.loads((host_dir / 'EndpointData_WKS01.json').read_text(encoding='utf-8'))
    assert document['InstalledOffice'] == []
    assert document['OperatingSystem']['Caption'] == 'Windows 11 Pro'


@pytest.mark.parametrize(
    'hostname, expected', [
        pytest.param('WKS01', 'WKS01', id="plain_hostname"),
        pytest.param('N/A', 'N_A', id="sentinel"),
        pytest.param('a\\b:c*d?e"f<g>h|i', 'a_b_c_d_e_f_g_h_i', id="windows_reserved"),
    ])
def test_safe_path_name(hostname, expected):
    assert safe_path_name(hostname) == expected


def test_export_unreadable_hostname_keeps_single_host_dir(exporter, tmp_path):
    report = EndpointReport(identity=HostIdentity('N/A', 'SN123'))
    destination = tmp_path / 'reports'

    assert exporter.export(report, destination) is True

    assert [p.name for p in destination.iterdir()] == ['N_A']
    host_dir = destination / 'N_A'
    assert exporter.failed_artifacts == []
    assert (host_dir / 'EndpointData_N_A.json').exists()
    assert read_rows(host_dir / 'HostInfo.csv') == [{'Hostname': 'N/A', 'SerialNumber': 'SN123'}]


def test_export_unencodable_value_only_fails_its_artifact(exporter, tmp_path):
    report = EndpointReport(
        identity=HostIdentity('WKS04', 'SN456'),
        installed_office=[OfficeInstallation('Microsoft Office \udc81 2016', '16.0', 'Microsoft Corporation')],
    )

    assert exporter.export(report, tmp_path) is True

    host_dir = tmp_path / 'WKS04'
    assert 'InstalledOffice' in exporter.failed_artifacts
    assert (host_dir / 'OEMProductKey.csv').exists()
    assert (host_dir / 'HostInfo.csv').exists()
