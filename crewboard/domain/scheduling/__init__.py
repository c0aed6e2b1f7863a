"""
Scheduling Domain

The schedule board: teams as columns, the working day as rows of
fixed-length slots, and bookings laid over them.

Structure:
- time_slots.py   # Slot labels and span arithmetic for the working day
- validator.py    # Working-hours and same-team overlap rules
- grid.py         # Day grid layout (anchor and continuation cells)
- navigator.py    # Current date and day/week view
- service.py      # Validated booking writes, publishes bookingsUpdated
- interaction.py  # Drag-move, drag-resize and click-to-step gestures
- session.py      # Snapshot of store data the board renders from
- router.py       # /schedule and /bookings endpoints
"""
