"""
SchemeFlow

Backend for a role-based healthcare-scheme administration dashboard: patient
registration, scheme eligibility matching and a multi-level approval chain.
"""

__version__ = "1.0.0"
__author__ = "SchemeFlow Team"
__description__ = "Healthcare scheme recommendation and approval workflow service"
