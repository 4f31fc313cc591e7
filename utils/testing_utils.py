"""
Testing Utilities
Helpers shared by offline and forked test suites
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3.contract import Contract
from web3.exceptions import ContractLogicError
from web3.logs import DISCARD

from blockchain.exceptions import ContractRevertError


def get_random_account() -> LocalAccount:
    return Account.create()


def get_random_address() -> str:
    return Account.create().address


@contextmanager
def reverts(reason: Optional[str] = None) -> Iterator[None]:
    """
    Assert that the block reverts, optionally with `reason`

    Accepts reverts from the in-memory models (ContractRevertError) and from
    a live node (web3 ContractLogicError).
    """
    try:
        yield
    except (ContractRevertError, ContractLogicError) as e:
        message = getattr(e, 'message', None) or str(e)
        if reason is not None and reason not in message:
            raise AssertionError(f"Expected revert '{reason}', got '{message}'") from e
    else:
        raise AssertionError(f"Expected revert{f' {reason!r}' if reason else ''}, but call succeeded")


def get_events(contract: Contract, receipt, event_name: str) -> List:
    """
    Decode events of one type emitted by `contract` in a receipt

    Args:
        contract: Contract whose ABI defines the event
        receipt: Transaction receipt
        event_name: Event name, e.g. "RewardClaimed"

    Returns:
        Decoded event logs
    """
    return list(getattr(contract.events, event_name)().process_receipt(receipt, errors=DISCARD))
