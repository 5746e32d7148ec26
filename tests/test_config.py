import pytest

from passbook.config import Settings, load_settings
from passbook.models import CreditBasis, TieBreak


def test_defaults_with_empty_environment():
    assert load_settings({}) == Settings()
    assert Settings().page_size == 25


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///ledger.db")
    monkeypatch.setenv("PASSBOOK_PAGE_SIZE", "10")
    monkeypatch.setenv("PASSBOOK_CREDIT_BASIS", "Vendor_Invoice")
    monkeypatch.setenv("PASSBOOK_VOUCHER_TIE_BREAK", "id")
    assert load_settings() == Settings(
        database_url="sqlite:///ledger.db",
        page_size=10,
        credit_basis=CreditBasis.VENDOR_INVOICE,
        tie_break=TieBreak.ID,
    )


@pytest.mark.parametrize("raw", ["0", "-3", "ten", "2.5"])
def test_invalid_page_size_falls_back(raw, caplog: pytest.LogCaptureFixture):
    assert load_settings({"PASSBOOK_PAGE_SIZE": raw}).page_size == 25
    assert "invalid_page_size" in caplog.text


def test_invalid_choices_fall_back(caplog: pytest.LogCaptureFixture):
    settings = load_settings(
        {"PASSBOOK_CREDIT_BASIS": "market", "PASSBOOK_VOUCHER_TIE_BREAK": "random"}
    )
    assert settings.credit_basis is CreditBasis.QUALITY_RATE
    assert settings.tie_break is TieBreak.INPUT_ORDER
    assert "PASSBOOK_CREDIT_BASIS" in caplog.text
    assert "PASSBOOK_VOUCHER_TIE_BREAK" in caplog.text


def test_blank_database_url_is_none():
    assert load_settings({"DATABASE_URL": "  "}).database_url is None
