import os
import logging
from datetime import datetime
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class CalculationAudit:
    """
    Optional audit trail of savings and comparison calculations.
    Disabled until enable() is called, so library use performs no file I/O.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(CalculationAudit, cls).__new__(cls)
            cls._instance.initialized = False
        return cls._instance

    def __init__(self):
        if self.initialized:
            return
        self.enabled = False
        self.session_id = None
        self.log_file: Optional[str] = None
        self.initialized = True

    def enable(self, log_dir: str) -> str:
        """Start a new audit file under log_dir and return its path."""
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        os.makedirs(log_dir, exist_ok=True)
        self.log_file = os.path.join(log_dir, f"audit_{self.session_id}.txt")
        with open(self.log_file, "w", encoding="utf-8") as f:
            f.write("=== ECOVISION CALCULATION AUDIT LOG ===\n")
            f.write(f"Session: {self.session_id}\n")
            f.write("=======================================\n\n")
        self.enabled = True
        logger.info(f"Calculation audit enabled: {self.log_file}")
        return self.log_file

    def disable(self):
        self.enabled = False

    def log_calculation(self, context: str, formula: str, variables: Dict[str, Any], result: float, unit: str = ""):
        """
        Log a calculation step to the audit file.

        Args:
            context: What is being calculated (e.g., "Savings: ola_mini -> metro_delhi")
            formula: Text form of the equation (e.g., "Reference.cost - Chosen.cost")
            variables: Actual values used
            result: The final result
            unit: Unit of the result (e.g., "INR")
        """
        if not self.enabled or not self.log_file:
            return

        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"[{datetime.now().strftime('%H:%M:%S')}] {context}\n")
                f.write(f"  Formula: {formula}\n")
                vars_str = ", ".join([f"{k}={v}" for k, v in variables.items()])
                f.write(f"  Inputs:  {vars_str}\n")
                f.write(f"  Result:  {result:.4f} {unit}\n")
                f.write("-" * 40 + "\n")
        except OSError as e:
            logger.error(f"Failed to write to audit log: {e}")


# Global Accessor
audit_logger = CalculationAudit()
