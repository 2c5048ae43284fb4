from ecovision.audit import audit_logger
from ecovision.comparator import project_savings
from ecovision.models import Option


def test_audit_is_off_by_default_and_writes_when_enabled(tmp_path):
    assert not audit_logger.enabled
    a = Option(id="ola_mini", name="Ola Mini", cost=118, time=12, co2=0.875)
    b = Option(id="metro_delhi", name="Metro", cost=20, time=17, co2=0.11)

    try:
        path = audit_logger.enable(str(tmp_path))
        project_savings(a, b)
    finally:
        audit_logger.disable()

    with open(path, encoding="utf-8") as f:
        text = f.read()
    assert "Savings: ola_mini -> metro_delhi" in text
    assert "98.0000 INR" in text
