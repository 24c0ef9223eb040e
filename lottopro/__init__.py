# Lotto Pro Generator
# - Weighted / uniform 6/45 sampler with fixed and excluded numbers
# - Sum, AC, mirror and matrix filters scored over a best-of-N search
# - Recent history (5) and latest official draw check

APP_NAME = "LottoPro"
APP_VER = "1.2.0"
