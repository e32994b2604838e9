"""
Package des sources de faits par plateforme

- Interface SystemFactSource
- Windows (WMI, registre)
"""
