"""
Command Line Interface Package

The ``budgetme`` command: spend from the daily allowance, undo and redo,
inspect history, and configure where the ledger is stored.

Command Structure:
- budgetme: print the current balance
- budgetme spend / undo / redo / garnish / list / report: ledger operations
- budgetme set / get: rate, category factors, synonyms and storage settings
- budgetme version / config: utility commands

Every ledger-changing command loads the ledger once, applies the change in
memory, and only writes it back if it still reconciles with what is stored.
"""
