from functools import lru_cache
import logging

from signup_wizard.application.ports.form_options import FormOptionsPort
from signup_wizard.application.ports.payment_tokenizer import PaymentTokenizerPort
from signup_wizard.application.ports.pricing import PricingPort
from signup_wizard.application.ports.quote_lead import QuoteLeadPort
from signup_wizard.application.ports.registration import RegistrationPort
from signup_wizard.application.ports.service_area import ServiceAreaPort
from signup_wizard.application.use_cases.form_options import LoadFormOptionsUseCase
from signup_wizard.application.use_cases.wizard import WizardUseCase
from signup_wizard.core.config import settings
from signup_wizard.infrastructure.backend.backend_client import BackendClient
from signup_wizard.infrastructure.backend.form_options import HttpFormOptions
from signup_wizard.infrastructure.backend.mock_backend import (
    MockFormOptions,
    MockPricing,
    MockQuoteLead,
    MockRegistration,
    MockServiceArea,
)
from signup_wizard.infrastructure.backend.pricing import HttpPricing
from signup_wizard.infrastructure.backend.quote_lead import HttpQuoteLead
from signup_wizard.infrastructure.backend.registration import HttpRegistration
from signup_wizard.infrastructure.backend.service_area import HttpServiceArea
from signup_wizard.infrastructure.payments.mock_tokenizer import MockPaymentTokenizer
from signup_wizard.infrastructure.payments.stripe_tokenizer import StripePaymentTokenizer
from signup_wizard.infrastructure.store.memory_store import MemoryWizardSessionStore


logger = logging.getLogger(__name__)


def _use_mock_backend() -> bool:
    return not settings.BACKEND_BASE_URL and settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_backend_client() -> BackendClient:
    if not settings.BACKEND_BASE_URL:
        raise ValueError("BACKEND_BASE_URL is required outside dev/local.")
    return BackendClient(base_url=settings.BACKEND_BASE_URL, timeout=settings.BACKEND_TIMEOUT_SECONDS)


def close_backend_client() -> None:
    """Close the shared backend client if one was opened."""
    if get_backend_client.cache_info().currsize:
        get_backend_client().close()
        get_backend_client.cache_clear()
        logger.info("Backend client closed")


@lru_cache
def get_session_store() -> MemoryWizardSessionStore:
    return MemoryWizardSessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)


@lru_cache
def get_service_area() -> ServiceAreaPort:
    if _use_mock_backend():
        zips = {z.strip() for z in settings.MOCK_SERVICE_AREA_ZIPS.split(",") if z.strip()}
        return MockServiceArea(zips)
    return HttpServiceArea(get_backend_client())


@lru_cache
def get_pricing() -> PricingPort:
    if _use_mock_backend():
        return MockPricing()
    return HttpPricing(get_backend_client())


@lru_cache
def get_quote_lead() -> QuoteLeadPort:
    if _use_mock_backend():
        return MockQuoteLead()
    return HttpQuoteLead(get_backend_client())


@lru_cache
def get_registration() -> RegistrationPort:
    if _use_mock_backend():
        return MockRegistration()
    return HttpRegistration(get_backend_client())


@lru_cache
def get_form_options_source() -> FormOptionsPort:
    if _use_mock_backend():
        return MockFormOptions()
    return HttpFormOptions(get_backend_client())


@lru_cache
def get_tokenizer() -> PaymentTokenizerPort:
    if not settings.STRIPE_SECRET_KEY:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockPaymentTokenizer (STRIPE_SECRET_KEY missing, ENV=dev/local)")
            return MockPaymentTokenizer()
        raise ValueError("STRIPE_SECRET_KEY is required to tokenize cards.")
    logger.info("Using StripePaymentTokenizer")
    return StripePaymentTokenizer(api_key=settings.STRIPE_SECRET_KEY)


def get_wizard_use_case() -> WizardUseCase:
    logger.debug("ENV=%s mock_backend=%s", settings.ENV, _use_mock_backend())
    return WizardUseCase(
        store=get_session_store(),
        form_options=LoadFormOptionsUseCase(source=get_form_options_source()),
        service_area=get_service_area(),
        pricing=get_pricing(),
        quote_lead=get_quote_lead(),
        tokenizer=get_tokenizer(),
        registration=get_registration(),
        service_state=settings.SERVICE_STATE,
    )
