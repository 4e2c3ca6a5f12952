"""Repositories package: one class per table, on top of BaseRepository.

Rule: repositories never commit; the calling service owns the transaction.
"""
