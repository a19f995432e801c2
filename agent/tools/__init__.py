from agent.tools.ledger import LedgerClient

__all__ = ["LedgerClient"]
