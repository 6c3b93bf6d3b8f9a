#!/usr/bin/python3

import json
import math
import random
import sys
import time

# Earth's field is roughly 25-65 uT; sweep through it with sensor noise.
while True:
    print(json.dumps({
        "field": 45 + 20 * math.sin(time.time() / 4) + random.gauss(0, 0.4)
    }))
    time.sleep(0.025)
    sys.stdout.flush()
