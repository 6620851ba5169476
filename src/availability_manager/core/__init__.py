from .slot_generator import AvailabilityRule, Slot, SlotGenerator, generate_slots, default_generation_window
from .exception_filter import ExceptionWindow, ExceptionFilter, filter_slots_by_exceptions, only_available
