"""
Tests for sentence-level obligation extraction.
"""
from app.models.obligation import ObligationOwner, ObligationStatus
from app.services.obligation_extractor import (
    FALLBACK_OBLIGATION,
    MAX_OBLIGATIONS,
    OBLIGATION_TEXT_MAX_CHARS,
    extract_obligations,
    infer_owner,
)


class TestObligationDetection:
    """Qualifying sentences and their owners."""

    def test_supplier_insurance_obligation(self):
        text = "Supplier shall maintain adequate insurance coverage throughout the term of this agreement."
        obligations = extract_obligations(text)

        assert len(obligations) == 1
        assert obligations[0].owner == ObligationOwner.SUPPLIER
        assert obligations[0].status == ObligationStatus.PENDING
        assert obligations[0].due_date is None

    def test_sample_contract(self, sample_contract):
        obligations = extract_obligations(sample_contract)

        assert [o.owner for o in obligations] == [ObligationOwner.SUPPLIER, ObligationOwner.CLIENT]
        assert obligations[0].obligation.startswith("The Supplier shall maintain")

    def test_short_sentences_are_skipped(self):
        """A phrase inside a sentence of 30 characters or fewer does not count."""
        obligations = extract_obligations("Vendor shall pay fees. Nothing else here to see.")

        assert obligations[0].obligation == FALLBACK_OBLIGATION

    def test_phrase_match_is_case_insensitive(self):
        obligations = extract_obligations("THE BUYER IS RESPONSIBLE FOR ALL SHIPPING COSTS INCURRED!")

        assert obligations[0].owner == ObligationOwner.CLIENT

    def test_text_is_bounded(self):
        sentence = "The vendor shall deliver " + "widgets " * 100
        obligation = extract_obligations(sentence)[0]

        assert len(obligation.obligation) == OBLIGATION_TEXT_MAX_CHARS


class TestOwnerInference:
    """Owner tagging rules."""

    def test_supplier_takes_priority(self):
        assert infer_owner("The supplier shall notify the client of delays") == ObligationOwner.SUPPLIER

    def test_party_labels(self):
        assert infer_owner("Party B agrees to host the service") == ObligationOwner.SUPPLIER
        assert infer_owner("Party A agrees to review the deliverables") == ObligationOwner.CLIENT

    def test_customer_is_client(self):
        assert infer_owner("The customer is required to provide access") == ObligationOwner.CLIENT

    def test_no_party_named(self):
        assert infer_owner("Each party shall notify the other of any breach") == ObligationOwner.BOTH

    def test_word_boundaries(self):
        assert infer_owner("Subclients are required to comply") == ObligationOwner.BOTH


class TestLimits:
    """Result count bounds."""

    def test_never_more_than_ten(self):
        text = " ".join(
            f"The supplier shall provide report number {i} to the steering committee." for i in range(50)
        )
        obligations = extract_obligations(text)

        assert len(obligations) == MAX_OBLIGATIONS
        assert obligations[-1].obligation.endswith("report number 9 to the steering committee")

    def test_fallback_for_non_matching_text(self):
        obligations = extract_obligations("A poem about the sea. Waves roll in and out all day long.")

        assert len(obligations) == 1
        assert obligations[0].owner == ObligationOwner.BOTH
        assert obligations[0].status == ObligationStatus.PENDING

    def test_fallback_for_empty_text(self):
        assert len(extract_obligations("")) == 1

    def test_custom_phrase_list(self):
        text = "The supplier will endeavour to respond to every ticket within a day."
        obligations = extract_obligations(text, phrases=("will endeavour",))

        assert obligations[0].owner == ObligationOwner.SUPPLIER
        assert obligations[0].obligation != FALLBACK_OBLIGATION
