"""
Module data model.

Contains the Module pair that represents one entry of a student's study plan.
"""

from typing import NamedTuple, Union


class Module(NamedTuple):
    """
    Represents a single module taken (or planned) by the student.

    This is the core data unit that flows through the engine. It is a
    NamedTuple on purpose: a Module compares equal to the plain pair
    ("CS2100", 4), so callers may pass either form.

    Attributes:
        code: Module code as it appears in the catalogue (e.g., "CS2040S")
        credits: Number of Modular Credits (MCs) the module is worth
    """
    code: str
    credits: Union[int, float]


def total_credits(modules) -> Union[int, float]:
    """Sum the MCs of a list of modules."""
    return sum(credits for _, credits in modules)


def module_codes(modules) -> list:
    """List the codes of a list of modules, keeping order."""
    return [code for code, _ in modules]
