from justask.services.thanks.ledger import ThanksLedger

__all__ = ["ThanksLedger"]
