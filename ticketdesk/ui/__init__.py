"""Streamlit views and widgets for the ticket dashboard."""

from .stepper import ConfirmationPrompt, StatusStepper, StepperProps, StepView

__all__ = ["ConfirmationPrompt", "StatusStepper", "StepperProps", "StepView"]
