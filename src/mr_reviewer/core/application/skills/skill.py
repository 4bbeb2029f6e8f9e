from abc import ABC, abstractmethod


class BaseSkill[T_Input, T_Output](ABC):
    """One async unit of review work with a typed input and output.

    Workflows compose skills; a skill raises ``SkillExecutionError`` when it
    cannot produce its output.
    """

    @abstractmethod
    async def execute(self, input_data: T_Input) -> T_Output:
        """Run the skill and return its result."""
