"""
Phone verification gateway for formatkit.

Issues one-time codes, checks codes presented back by users, logs USSD
registrations and records phone opt-ins. All records go through a
:class:`~formatkit.store.DocumentStore`; phone numbers are normalized
with a :class:`~formatkit.phone.PhoneNumberValidator` before any
lookup or write.
"""

from __future__ import annotations

import structlog

from formatkit import metrics
from formatkit.config import Settings, get_settings
from formatkit.converters import to_generic_record
from formatkit.errors import NoMatchingCodeError
from formatkit.models import PhoneOptIn, USSDSessionLog, VerificationCode
from formatkit.phone import PhoneNumberValidator
from formatkit.store.base import DocumentStore, suffix_collection
from formatkit.utils import generate_random_with_n_digits

logger = structlog.get_logger(__name__)


class VerificationGateway:
    """Validates phone numbers against issued codes and persists the outcome.

    Parameters
    ----------
    store:
        Document store receiving codes, session logs and opt-ins.
    validator:
        Phone-number validator; built from settings when omitted.
    settings:
        Source of collection names and the collection suffix; the cached
        settings when omitted.
    otp_collection, opt_in_collection, ussd_collection:
        Logical collection names overriding the settings. The settings'
        collection suffix is applied to all three.
    """

    def __init__(
        self,
        store: DocumentStore,
        validator: PhoneNumberValidator | None = None,
        *,
        settings: Settings | None = None,
        otp_collection: str | None = None,
        opt_in_collection: str | None = None,
        ussd_collection: str | None = None,
    ) -> None:
        settings = settings or get_settings()
        suffix = settings.collection_suffix
        self._store = store
        self._validator = validator or PhoneNumberValidator.from_settings(settings)
        self._otp_digits = settings.otp_digits
        self.otp_collection = suffix_collection(otp_collection or settings.otp_collection, suffix)
        self.opt_in_collection = suffix_collection(
            opt_in_collection or settings.phone_opt_in_collection, suffix
        )
        self.ussd_collection = suffix_collection(
            ussd_collection or settings.ussd_session_collection, suffix
        )

    async def issue_verification_code(
        self,
        msisdn: str,
        message: str = "",
        *,
        digits: int | None = None,
    ) -> str:
        """Create and store a valid one-time code for *msisdn*.

        Returns:
            The generated code, to be sent to the user out of band.
        """
        normalized = self._validator.normalize(msisdn)
        code = generate_random_with_n_digits(digits or self._otp_digits)
        record = VerificationCode(msisdn=normalized, authorization_code=code, message=message)
        doc_id = await self._store.put(self.otp_collection, to_generic_record(record))
        logger.info("verification_code_issued", msisdn=normalized, doc_id=doc_id)
        return code

    async def validate_msisdn(
        self,
        msisdn: str,
        verification_code: str,
        is_ussd: bool,
    ) -> str:
        """Check *verification_code* for *msisdn* and return the normalized number.

        For USSD registrations the code is the telco session id: the
        session is logged and no lookup happens. Otherwise every matching
        valid code is marked used.

        Raises:
            InvalidFormatError: *msisdn* is not a valid phone number.
            ParseError: *msisdn* could not be parsed.
            NoMatchingCodeError: No valid code matches.
            PersistenceError: The store failed.
        """
        normalized = self._validator.normalize(msisdn)
        log = logger.bind(msisdn=normalized)

        if is_ussd:
            session = USSDSessionLog(msisdn=normalized, session_id=verification_code)
            await self._store.put(self.ussd_collection, to_generic_record(session))
            metrics.verifications_total.labels(channel="ussd", outcome="ok").inc()
            log.info("ussd_session_logged")
            return normalized

        docs = await self._store.query(
            self.otp_collection,
            {
                "isValid": True,
                "msisdn": normalized,
                "authorizationCode": verification_code,
            },
        )
        if not docs:
            metrics.verifications_total.labels(channel="otp", outcome="no_match").inc()
            log.info("verification_code_not_found")
            raise NoMatchingCodeError("no matching verification codes found")

        for doc in docs:
            await self._store.update(self.otp_collection, doc.id, {"isValid": False})
        metrics.verifications_total.labels(channel="otp", outcome="ok").inc()
        log.info("verification_code_consumed", count=len(docs))
        return normalized

    async def validate_and_save_msisdn(
        self,
        msisdn: str,
        verification_code: str,
        is_ussd: bool,
        opt_in: bool,
    ) -> str:
        """Validate like :meth:`validate_msisdn`, then record an opt-in if requested."""
        validated = await self.validate_msisdn(msisdn, verification_code, is_ussd)
        if opt_in:
            record = PhoneOptIn(msisdn=validated, opted_in=True)
            await self._store.put(self.opt_in_collection, to_generic_record(record))
            logger.info("phone_opt_in_saved", msisdn=validated)
        return validated
