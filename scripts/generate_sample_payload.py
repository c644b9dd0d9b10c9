"""
Sample Payload Script.
Generates a synthetic analytics payload (history plus forecast) and writes it as JSON.
"""
import argparse
import json
import math
import random
from datetime import date, timedelta


def generate_payload(history_days=60, forecast_days=30, corrupt_every=0, seed=42):
    """
    Build a payload with a weekly sine pattern, noise and optional corrupted records.
    """
    rng = random.Random(seed)
    start = date.today() - timedelta(days=history_days)
    historical, predictions = [], []

    for i in range(history_days + forecast_days):
        day = start + timedelta(days=i)
        orders = max(0, round(20 + 6 * math.sin(i / 7 * 2 * math.pi) + rng.uniform(-3, 3)))
        aov = round(75 + rng.uniform(-10, 10), 2)
        record = {
            "date": day.isoformat(),
            "revenue": round(orders * aov, 2),
            "orders_count": orders,
            "conversion_rate": round(2.5 + rng.uniform(-0.8, 0.8), 2),
            "avg_order_value": aov,
        }

        if corrupt_every and i % corrupt_every == 0:
            record["revenue"] = "n/a"

        if i < history_days:
            record.update({"kind": "historical", "isPrediction": False})
            historical.append(record)
        else:
            spread = 0.3 * (1 + (i - history_days) / forecast_days)
            record.update({
                "kind": "prediction",
                "isPrediction": True,
                "confidence_score": round(max(0.5, 0.9 - (i - history_days) * 0.01), 2),
                "confidence_interval": {
                    "revenue_min": round(record["revenue"] * (1 - spread), 2) if isinstance(record["revenue"], float) else 0,
                    "revenue_max": round(record["revenue"] * (1 + spread), 2) if isinstance(record["revenue"], float) else 0,
                    "orders_min": max(0, math.floor(orders * (1 - spread))),
                    "orders_max": math.ceil(orders * (1 + spread)),
                },
            })
            predictions.append(record)

    return {"historical": historical, "predictions": predictions, "period_days": history_days}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Write a synthetic analytics payload")
    parser.add_argument("output", help="Destination JSON file")
    parser.add_argument("--history-days", type=int, default=60)
    parser.add_argument("--forecast-days", type=int, default=30)
    parser.add_argument("--corrupt-every", type=int, default=0, help="Corrupt revenue on every Nth record")
    args = parser.parse_args()

    payload = generate_payload(args.history_days, args.forecast_days, args.corrupt_every)
    with open(args.output, "w") as f:
        json.dump(payload, f, indent=2)
    print(f"Wrote {len(payload['historical'])} historical and {len(payload['predictions'])} predicted points to {args.output}")
