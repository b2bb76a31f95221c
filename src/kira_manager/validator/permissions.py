"""Governance permissions recognized by the chain."""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class Permission(IntEnum):
    """Governance permission identifiers, as stored on chain."""

    ZERO = 0
    SET_PERMISSIONS = 1
    CLAIM_VALIDATOR = 2
    CLAIM_COUNCILOR = 3
    WHITELIST_ACCOUNT_PERMISSION_PROPOSAL = 4
    VOTE_WHITELIST_ACCOUNT_PERMISSION_PROPOSAL = 5
    UPSERT_TOKEN_ALIAS = 6
    CHANGE_TX_FEE = 7
    UPSERT_TOKEN_RATE = 8
    UPSERT_ROLE = 9
    CREATE_UPSERT_DATA_REGISTRY_PROPOSAL = 10
    VOTE_UPSERT_DATA_REGISTRY_PROPOSAL = 11
    CREATE_SET_NETWORK_PROPERTY_PROPOSAL = 12
    VOTE_SET_NETWORK_PROPERTY_PROPOSAL = 13
    CREATE_UPSERT_TOKEN_ALIAS_PROPOSAL = 14
    VOTE_UPSERT_TOKEN_ALIAS_PROPOSAL = 15
    CREATE_SET_POOR_NETWORK_MESSAGES_PROPOSAL = 16
    VOTE_SET_POOR_NETWORK_MESSAGES_PROPOSAL = 17
    CREATE_UPSERT_TOKEN_RATE_PROPOSAL = 18
    VOTE_UPSERT_TOKEN_RATE_PROPOSAL = 19
    CREATE_UNJAIL_VALIDATOR_PROPOSAL = 20
    VOTE_UNJAIL_VALIDATOR_PROPOSAL = 21
    CREATE_ROLE_PROPOSAL = 22
    VOTE_CREATE_ROLE_PROPOSAL = 23
    CREATE_TOKENS_WHITE_BLACK_CHANGE_PROPOSAL = 24
    VOTE_TOKENS_WHITE_BLACK_CHANGE_PROPOSAL = 25
    CREATE_RESET_WHOLE_VALIDATOR_RANK_PROPOSAL = 26
    VOTE_RESET_WHOLE_VALIDATOR_RANK_PROPOSAL = 27
    CREATE_SOFTWARE_UPGRADE_PROPOSAL = 28
    VOTE_SOFTWARE_UPGRADE_PROPOSAL = 29
    SET_CLAIM_VALIDATOR_PERMISSION = 30
    CREATE_SET_PROPOSAL_DURATION_PROPOSAL = 31
    VOTE_SET_PROPOSAL_DURATION_PROPOSAL = 32
    BLACKLIST_ACCOUNT_PERMISSION_PROPOSAL = 33
    VOTE_BLACKLIST_ACCOUNT_PERMISSION_PROPOSAL = 34
    REMOVE_WHITELISTED_ACCOUNT_PERMISSION_PROPOSAL = 35
    VOTE_REMOVE_WHITELISTED_ACCOUNT_PERMISSION_PROPOSAL = 36
    REMOVE_BLACKLISTED_ACCOUNT_PERMISSION_PROPOSAL = 37
    VOTE_REMOVE_BLACKLISTED_ACCOUNT_PERMISSION_PROPOSAL = 38
    WHITELIST_ROLE_PERMISSION_PROPOSAL = 39
    VOTE_WHITELIST_ROLE_PERMISSION_PROPOSAL = 40
    BLACKLIST_ROLE_PERMISSION_PROPOSAL = 41
    VOTE_BLACKLIST_ROLE_PERMISSION_PROPOSAL = 42
    REMOVE_WHITELISTED_ROLE_PERMISSION_PROPOSAL = 43
    VOTE_REMOVE_WHITELISTED_ROLE_PERMISSION_PROPOSAL = 44
    REMOVE_BLACKLISTED_ROLE_PERMISSION_PROPOSAL = 45
    VOTE_REMOVE_BLACKLISTED_ROLE_PERMISSION_PROPOSAL = 46
    ASSIGN_ROLE_TO_ACCOUNT_PROPOSAL = 47
    VOTE_ASSIGN_ROLE_TO_ACCOUNT_PROPOSAL = 48
    UNASSIGN_ROLE_FROM_ACCOUNT_PROPOSAL = 49
    VOTE_UNASSIGN_ROLE_FROM_ACCOUNT_PROPOSAL = 50
    REMOVE_ROLE_PROPOSAL = 51
    VOTE_REMOVE_ROLE_PROPOSAL = 52
    CREATE_UPSERT_UBI_PROPOSAL = 53
    VOTE_UPSERT_UBI_PROPOSAL = 54
    CREATE_REMOVE_UBI_PROPOSAL = 55
    VOTE_REMOVE_UBI_PROPOSAL = 56
    CREATE_SLASH_VALIDATOR_PROPOSAL = 57
    VOTE_SLASH_VALIDATOR_PROPOSAL = 58
    CREATE_BASKET_PROPOSAL = 59
    VOTE_BASKET_PROPOSAL = 60
    HANDLE_BASKET_EMERGENCY = 61
    CREATE_RESET_WHOLE_COUNCILOR_RANK_PROPOSAL = 62
    VOTE_RESET_WHOLE_COUNCILOR_RANK_PROPOSAL = 63
    CREATE_JAIL_COUNCILOR_PROPOSAL = 64
    VOTE_JAIL_COUNCILOR_PROPOSAL = 65


POST_GENESIS_PERMISSIONS: Final[tuple[Permission, ...]] = (
    Permission.WHITELIST_ACCOUNT_PERMISSION_PROPOSAL,
    Permission.REMOVE_WHITELISTED_ACCOUNT_PERMISSION_PROPOSAL,
    Permission.CREATE_UPSERT_TOKEN_ALIAS_PROPOSAL,
    Permission.CREATE_SOFTWARE_UPGRADE_PROPOSAL,
    Permission.VOTE_WHITELIST_ACCOUNT_PERMISSION_PROPOSAL,
    Permission.VOTE_REMOVE_WHITELISTED_ACCOUNT_PERMISSION_PROPOSAL,
    Permission.VOTE_UPSERT_TOKEN_ALIAS_PROPOSAL,
    Permission.VOTE_SOFTWARE_UPGRADE_PROPOSAL,
)
"""Permissions granted to the genesis validator so it can govern the new network."""
