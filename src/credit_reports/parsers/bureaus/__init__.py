"""Bureau-specific parsing strategies."""

from credit_reports.parsers.bureaus.base import BureauParser
from credit_reports.parsers.bureaus.cibil import CIBILParser
from credit_reports.parsers.bureaus.crif import CRIFParser
from credit_reports.parsers.bureaus.equifax import EquifaxParser
from credit_reports.parsers.bureaus.experian import ExperianParser

__all__ = ["BureauParser", "CIBILParser", "CRIFParser", "EquifaxParser", "ExperianParser"]
