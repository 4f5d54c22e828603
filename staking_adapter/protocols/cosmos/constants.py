"""
Cosmos SDK constants
"""

# Message type URLs
MSG_DELEGATE_TYPE_URL = "/cosmos.staking.v1beta1.MsgDelegate"
MSG_UNDELEGATE_TYPE_URL = "/cosmos.staking.v1beta1.MsgUndelegate"
MSG_BEGIN_REDELEGATE_TYPE_URL = "/cosmos.staking.v1beta1.MsgBeginRedelegate"
MSG_WITHDRAW_DELEGATOR_REWARD_TYPE_URL = "/cosmos.distribution.v1beta1.MsgWithdrawDelegatorReward"

# ABCI query paths (gRPC method names)
QUERY_DELEGATOR_DELEGATIONS = "/cosmos.staking.v1beta1.Query/DelegatorDelegations"
QUERY_VALIDATORS = "/cosmos.staking.v1beta1.Query/Validators"
QUERY_DELEGATION_REWARDS = "/cosmos.distribution.v1beta1.Query/DelegationRewards"

# Validator status filter for listings
BOND_STATUS_BONDED = "BOND_STATUS_BONDED"

# Amounts passed to delegate/undelegate are already expressed in the
# requested denom (e.g. "uom"), so no display -> base scaling is applied
DENOM_AMOUNT_DECIMALS = 0

# sdk.Dec values (shares, DecCoin amounts) travel on the wire as integer
# strings scaled by 10^18
LEGACY_DEC_PRECISION = 18

# Page size for paginated queries
DEFAULT_PAGE_LIMIT = 100

# Broadcast result code meaning CheckTx accepted the transaction
SUCCESS_CODE = 0
