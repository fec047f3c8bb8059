from django.dispatch import Signal

# Sent after commit of a credit that crossed the reward threshold.
# Arguments: redemption (RewardRedemption)
rewards_earned = Signal()
