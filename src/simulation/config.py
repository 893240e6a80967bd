# Competition model parameters
RIDE_GROWTH_RATE = 0.3  # r1, intrinsic growth rate of the ride-sourcing fleet (1/year)
CRUISE_GROWTH_RATE = 0.2  # r2, intrinsic growth rate of the cruise taxi fleet (1/year)
RIDE_CAPACITY = 17.5  # N1, ride-sourcing carrying capacity (thousand vehicles)
CRUISE_CAPACITY = 17.5  # N2, cruise taxi carrying capacity (thousand vehicles)
RIDE_COMPETITION = 0.2  # mu1, pressure of cruise taxis on ride-sourcing
CRUISE_COMPETITION = 0.1  # mu2, pressure of ride-sourcing on cruise taxis

# Driving distance saturation model D(x) = c - b^2 / (a*x + b)
DISTANCE_A = -0.002404
DISTANCE_B = 46.184166
DISTANCE_C = 534.469131

# Emission and energy factors
EMISSION_FACTOR = 0.184  # EF, gasoline emission factor
ELECTRIC_EMISSION_FACTOR = 0.607  # EEF, grid emission factor for electric vehicles
ENERGY_FACTOR = 0.12  # E, energy consumption factor

# Fleet composition (gasoline vs electric share per segment)
RIDE_GASOLINE_SHARE = 0.15
RIDE_ELECTRIC_SHARE = 0.85
CRUISE_GASOLINE_SHARE = 0.526
CRUISE_ELECTRIC_SHARE = 0.474

# Initial fleet sizes (thousand vehicles)
INITIAL_RIDE_FLEET = 14.5
INITIAL_CRUISE_FLEET = 15.5

# Simulated horizon (years)
T_START = 0.0
T_END = 50.0

# Solver settings
RTOL = 1e-3  # Relative tolerance of the RK45 error control
ATOL = 1e-6  # Absolute tolerance of the RK45 error control
MAX_STEP = 0.5  # Upper bound on a single step (years), keeps extrema search dense
MAX_STEPS = 100_000  # Step budget before the integration is declared failed

# Output
OUTPUT_DIR = "."  # Charts are written here and overwritten on every run
CARBON_CHART_FILENAME = "carbon_vs_market_share.png"
SHARE_CHART_FILENAME = "market_share_evolution.png"
FIGURE_DPI = 150

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"
