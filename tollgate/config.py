# Distance of each interchange from the zero point, in KM
INTERCHANGES = {
    "Zero point": 0,
    "NS Interchange": 5,
    "Ph4 Interchange": 10,
    "Ferozpur Interchange": 17,
    "Lake City Interchange": 24,
    "Raiwand Interchange": 29,
    "Bahria Interchange": 34,
}

# Month-day, any year
NATIONAL_HOLIDAYS = frozenset({
    "03-23",
    "08-14",
    "12-25",
})

BASE_RATE = 20
PER_KM_RATE = 0.2
WEEKEND_RATE_MULTIPLIER = 1.5
NUMBER_PLATE_DISCOUNT = 0.10
NATIONAL_HOLIDAY_DISCOUNT = 0.50
