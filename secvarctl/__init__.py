"""Manage platform secure boot variables on host firmware and guest hypervisors."""

__version__ = '0.1.0'
