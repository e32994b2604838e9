"""
Endpoint License Probe - Sonde d'inventaire des licences d'un poste Windows

Ce package lit les faits d'identité, de système d'exploitation, de
licences et d'installations Office du poste local et les exporte en
fichiers CSV et JSON.
"""

__version__ = "1.0.0"
