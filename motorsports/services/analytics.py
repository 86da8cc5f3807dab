"""Lap-time analytics: formatting and per-driver / per-vehicle aggregation."""
from typing import Iterable


def format_lap_time(ms: int) -> str:
    """Render milliseconds as ``mm:ss.mmm``.

    Minutes are not capped at 59, so a 75 minute stint renders as ``75:00.000``.
    """
    minutes = ms // 60000
    seconds = (ms % 60000) // 1000
    millis = ms % 1000
    return f"{minutes:02d}:{seconds:02d}.{millis:03d}"


def driver_name(driver) -> str:
    return f"{driver.user.first_name} {driver.user.last_name}"


def vehicle_name(vehicle) -> str:
    return f"{vehicle.year} {vehicle.make} {vehicle.model}"


def summarize_laps(laps: Iterable) -> dict:
    """Aggregate lap rows into the analytics summary.

    ``laps`` are LapTime rows with driver (and its user), vehicle and event
    loaded. The caller decides the scope (valid laps, optional event).
    Best-lap lists come back fastest first; a tie keeps the lap seen first.
    """
    total = 0
    best_by_driver = {}
    best_by_vehicle = {}
    trends = {}

    for lap in laps:
        total += 1
        formatted = format_lap_time(lap.lap_time_ms)
        d_name = driver_name(lap.driver)
        v_name = vehicle_name(lap.vehicle)

        best = best_by_driver.get(lap.driver_id)
        if best is None or lap.lap_time_ms < best["lap_time_ms"]:
            best_by_driver[lap.driver_id] = {
                "driver_id": lap.driver_id,
                "driver_name": d_name,
                "lap_time_ms": lap.lap_time_ms,
                "lap_time_formatted": formatted,
                "vehicle_name": v_name,
                "event_name": lap.event.name,
            }

        best = best_by_vehicle.get(lap.vehicle_id)
        if best is None or lap.lap_time_ms < best["lap_time_ms"]:
            best_by_vehicle[lap.vehicle_id] = {
                "vehicle_id": lap.vehicle_id,
                "vehicle_name": v_name,
                "lap_time_ms": lap.lap_time_ms,
                "lap_time_formatted": formatted,
                "driver_name": d_name,
                "event_name": lap.event.name,
            }

        trend = trends.setdefault(
            lap.driver_id,
            {"driver_id": lap.driver_id, "driver_name": d_name, "laps": []},
        )
        trend["laps"].append({
            "lap_number": lap.lap_number,
            "lap_time_ms": lap.lap_time_ms,
            "lap_time_formatted": formatted,
        })

    for trend in trends.values():
        trend["laps"].sort(key=lambda point: point["lap_number"])

    return {
        "total_laps": total,
        "best_laps_by_driver": sorted(best_by_driver.values(), key=lambda b: b["lap_time_ms"]),
        "best_laps_by_vehicle": sorted(best_by_vehicle.values(), key=lambda b: b["lap_time_ms"]),
        "lap_trends_by_driver": list(trends.values()),
    }
