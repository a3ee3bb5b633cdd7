"""
Salary cap collaborator used to validate offseason contract actions.
"""

from .cap_calculator import CapCalculator, CapCheckResult

__all__ = ['CapCalculator', 'CapCheckResult']
