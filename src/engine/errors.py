class InvalidLoanTermsError(ValueError):
    """Loan inputs that cannot produce a schedule reaching zero balance."""
