"""
schedsim package.

Simulates FCFS, Round Robin, SPN and SRT CPU scheduling over a fixed set of
processes and reports waiting/turnaround times, Gantt charts and the Round
Robin ready-queue trace.
"""

__all__ = ["algorithms", "cli"]
