"""
Multi-pass matching engine for transaction reconciliation.
Runs the matching strategies in priority order over shrinking pools of
unmatched transactions.
"""

from datetime import datetime
from typing import Optional, Sequence
import logging

from ..models.transaction import (
    Transaction,
    MatchedPair,
    ReconciliationReport,
    ReconciliationSummary,
)
from ..config import (
    ReconConfig,
    PASS_ORDER,
    PASS_EXACT,
    PASS_FUZZY_DATE,
    PASS_DESCRIPTION,
)
from .strategies import (
    MatchingStrategy,
    ExactMatchStrategy,
    FuzzyDateStrategy,
    DescriptionMatchStrategy,
    normalize_description,
)

logger = logging.getLogger(__name__)


class ReconciliationEngine:
    """
    Main reconciliation engine that orchestrates the matching process.

    Each pass sweeps the bank pool last-to-first and claims the first
    eligible ledger transaction, scanning the ledger pool front-to-back.
    Claimed transactions leave both pools at once, so a later, looser pass
    never sees them. Pass order and scan direction decide which pairing
    wins when several candidates are eligible.
    """

    def __init__(self, config: Optional[ReconConfig] = None):
        """
        Initialize the reconciliation engine.

        Args:
            config: Application configuration, defaults when omitted
        """
        self.config = config or ReconConfig()
        self.strategies = self._build_strategies()

    def _build_strategies(self) -> list[MatchingStrategy]:
        """
        Build matching strategies from configuration.

        Returns:
            Enabled strategies in pass order
        """
        matching = self.config.matching
        factories = {
            PASS_EXACT: lambda: ExactMatchStrategy(
                amount_tolerance=matching.amount_tolerance,
                confidence=matching.confidence_exact,
                date_tolerance_days=matching.exact_date_tolerance_days,
            ),
            PASS_FUZZY_DATE: lambda: FuzzyDateStrategy(
                amount_tolerance=matching.amount_tolerance,
                confidence=matching.confidence_fuzzy_date,
                tolerance_days=matching.fuzzy_date_tolerance_days,
            ),
            PASS_DESCRIPTION: lambda: DescriptionMatchStrategy(
                amount_tolerance=matching.amount_tolerance,
                confidence=matching.confidence_description,
                min_length=matching.min_description_length,
            ),
        }

        strategies = []
        for pass_name in PASS_ORDER:
            if pass_name in matching.enabled_passes:
                strategies.append(factories[pass_name]())
                logger.debug(f"Loaded matching pass: {pass_name}")
        return strategies

    def reconcile(
        self,
        bank_transactions: Sequence[Transaction],
        ledger_transactions: Sequence[Transaction],
    ) -> ReconciliationReport:
        """
        Reconcile bank statement transactions against ledger transactions.

        Args:
            bank_transactions: Bank side, in statement order
            ledger_transactions: Ledger side, in ledger order

        Returns:
            Report of matched pairs, leftovers on each side, and totals
        """
        start_time = datetime.now()
        logger.info(
            f"Starting reconciliation: {len(bank_transactions)} bank txns, "
            f"{len(ledger_transactions)} ledger txns"
        )

        remaining_bank = list(bank_transactions)
        remaining_ledger = list(ledger_transactions)
        matches: list[MatchedPair] = []

        for strategy in self.strategies:
            found = self._run_pass(strategy, remaining_bank, remaining_ledger, matches)
            logger.debug(
                f"Pass {strategy.name}: {found} matches found, "
                f"{len(remaining_bank)} bank and {len(remaining_ledger)} "
                f"ledger remaining"
            )

        summary = self.generate_summary(
            matches,
            remaining_bank,
            remaining_ledger,
            total_bank_transactions=len(bank_transactions),
            total_ledger_transactions=len(ledger_transactions),
        )

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Reconciliation complete in {elapsed:.2f}s: {summary.match_count} "
            f"matches, {len(remaining_bank)} bank-only, "
            f"{len(remaining_ledger)} ledger-only"
        )

        return ReconciliationReport(
            matches=tuple(matches),
            unmatched_bank=tuple(remaining_bank),
            unmatched_ledger=tuple(remaining_ledger),
            summary=summary,
        )

    def _run_pass(
        self,
        strategy: MatchingStrategy,
        remaining_bank: list[Transaction],
        remaining_ledger: list[Transaction],
        matches: list[MatchedPair],
    ) -> int:
        """
        Run one matching pass, removing claimed transactions from the pools.

        Args:
            strategy: Strategy deciding eligibility for this pass
            remaining_bank: Unmatched bank pool, mutated in place
            remaining_ledger: Unmatched ledger pool, mutated in place
            matches: Match list to append to

        Returns:
            Number of matches found in this pass
        """
        found = 0

        # Backwards so deleting the current bank entry leaves unvisited indexes intact
        for i in range(len(remaining_bank) - 1, -1, -1):
            bank_txn = remaining_bank[i]
            match_idx = strategy.find_match(bank_txn, remaining_ledger)
            if match_idx is None:
                continue

            ledger_txn = remaining_ledger[match_idx]
            if strategy.name == PASS_DESCRIPTION and (
                not normalize_description(bank_txn.description)
                or not normalize_description(ledger_txn.description)
            ):
                logger.warning(
                    f"Description match on blank description: bank {bank_txn.id}, "
                    f"ledger {ledger_txn.id}"
                )

            matches.append(
                MatchedPair(
                    bank_transaction=bank_txn,
                    ledger_transaction=ledger_txn,
                    confidence=strategy.confidence,
                    notes=strategy.notes,
                    match_pass=strategy.name,
                )
            )
            del remaining_bank[i]
            del remaining_ledger[match_idx]
            found += 1

        return found

    def generate_summary(
        self,
        matches: Sequence[MatchedPair],
        unmatched_bank: Sequence[Transaction],
        unmatched_ledger: Sequence[Transaction],
        total_bank_transactions: int = 0,
        total_ledger_transactions: int = 0,
    ) -> ReconciliationSummary:
        """
        Generate a summary of the reconciliation results.

        The bank-side amount of each match is the canonical matched amount.

        Args:
            matches: Matched pairs
            unmatched_bank: Bank transactions left unmatched
            unmatched_ledger: Ledger transactions left unmatched
            total_bank_transactions: Size of the bank input
            total_ledger_transactions: Size of the ledger input

        Returns:
            Reconciliation summary object
        """
        pass_counts: dict[str, int] = {}
        for match in matches:
            pass_counts[match.match_pass] = pass_counts.get(match.match_pass, 0) + 1

        return ReconciliationSummary(
            total_matched_amount=sum((m.bank_transaction.amount for m in matches), 0.0),
            total_unmatched_bank_amount=sum((t.amount for t in unmatched_bank), 0.0),
            total_unmatched_ledger_amount=sum(
                (t.amount for t in unmatched_ledger), 0.0
            ),
            match_count=len(matches),
            discrepancy_count=len(unmatched_bank) + len(unmatched_ledger),
            total_bank_transactions=total_bank_transactions,
            total_ledger_transactions=total_ledger_transactions,
            matches_by_pass=pass_counts,
        )


def reconcile(
    bank_transactions: Sequence[Transaction],
    ledger_transactions: Sequence[Transaction],
    config: Optional[ReconConfig] = None,
) -> ReconciliationReport:
    """Reconcile two transaction lists with a one-off engine."""
    return ReconciliationEngine(config).reconcile(bank_transactions, ledger_transactions)
