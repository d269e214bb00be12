from enum import StrEnum


class SeatType(StrEnum):
    REGULAR = 'regular'
    PREMIUM = 'premium'
    VIP = 'vip'
