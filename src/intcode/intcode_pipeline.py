"""Chains of Intcode machines that feed one another (amplifier pipelines)."""

import itertools
import logging
from typing import Iterable, List, Sequence, Tuple

from intcode.intcode_error import IntcodeError
from intcode.intcode_vm import HaltCondition, HaltReason, IntcodeVM


class AmplifierChain:
    """
    A chain of machines running the same program, each primed with a phase setting.

    The output of each machine is fed to the input of the next.  In series mode
    the signal passes through the chain once; in feedback mode the last
    machine's output is fed back to the first until every machine has exited.
    """

    def __init__(self, image: Sequence[int], phase_settings: Iterable[int]) -> None:
        """
        Initialize the chain.

        Args:
            image: Program image every amplifier runs
            phase_settings: One phase setting per amplifier, in chain order
        """
        self._image = list(image)
        self._phase_settings = list(phase_settings)
        if not self._phase_settings:
            raise ValueError("An amplifier chain needs at least one phase setting")

        self._logger = logging.getLogger("AmplifierChain")
        self._logger.debug(
            "Created chain of %d amplifiers with phases %s (image length %d)",
            len(self._phase_settings), self._phase_settings, len(self._image)
        )

    @property
    def phase_settings(self) -> List[int]:
        """Phase settings in chain order."""
        return list(self._phase_settings)

    def _boot(self) -> List[IntcodeVM]:
        """Create a fresh machine per amplifier with its phase setting queued."""
        machines = []
        for phase in self._phase_settings:
            vm = IntcodeVM(self._image)
            vm.push_input(phase)
            machines.append(vm)

        return machines

    def run_series(self, initial_signal: int = 0) -> int:
        """
        Pass a signal through each amplifier once.

        Args:
            initial_signal: Signal fed to the first amplifier

        Returns:
            The first output of the last amplifier

        Raises:
            IntcodeError: If an amplifier faults or exits without producing output
        """
        signal = initial_signal
        for index, vm in enumerate(self._boot()):
            vm.push_input(signal)
            vm.run(HaltCondition.EXIT)
            output = vm.pop_output()
            if output is None:
                raise IntcodeError(f"Amplifier {index} exited without producing output")

            signal = output

        self._logger.debug("Phases %s produced signal %d in series", self._phase_settings, signal)
        return signal

    def run_feedback_loop(self, initial_signal: int = 0) -> int:
        """
        Run the amplifiers in a loop until they have all exited.

        Each amplifier runs until it produces one output, which is passed to the
        next amplifier (the last feeds the first).  Amplifiers that exit drop out
        of the rotation.

        Args:
            initial_signal: Signal fed to the first amplifier

        Returns:
            The last output produced by the final amplifier

        Raises:
            IntcodeError: If an amplifier faults or the final amplifier never produces output
        """
        machines = self._boot()
        machines[0].push_input(initial_signal)

        last_index = len(machines) - 1
        last_signal: int | None = None
        active = list(range(len(machines)))
        position = 0

        while active:
            index = active[position]
            vm = machines[index]
            if vm.run(HaltCondition.OUTPUT) is HaltReason.EXITED:
                active.pop(position)
                if active:
                    position %= len(active)

                continue

            value = vm.pop_output()
            assert value is not None  # PRODUCED_OUTPUT guarantees one value
            if index == last_index:
                last_signal = value

            machines[(index + 1) % len(machines)].push_input(value)
            position = (position + 1) % len(active)

        if last_signal is None:
            raise IntcodeError(f"Amplifier {last_index} exited without producing output")

        self._logger.debug("Phases %s produced signal %d in feedback loop", self._phase_settings, last_signal)
        return last_signal


def max_thruster_signal(
    image: Sequence[int],
    phases: Iterable[int],
    feedback: bool = False
) -> Tuple[int, Tuple[int, ...]]:
    """
    Find the phase ordering that produces the highest signal from an amplifier chain.

    Args:
        image: Program image every amplifier runs
        phases: Phase settings to permute; one amplifier per setting
        feedback: Run the chain as a feedback loop rather than in series

    Returns:
        Tuple of the best signal and the phase ordering that produced it
    """
    phase_list = list(phases)
    if not phase_list:
        raise ValueError("No phase settings to search")

    best: Tuple[int, Tuple[int, ...]] | None = None

    for ordering in itertools.permutations(phase_list):
        chain = AmplifierChain(image, ordering)
        signal = chain.run_feedback_loop() if feedback else chain.run_series()
        if best is None or signal > best[0]:
            best = (signal, ordering)

    assert best is not None  # At least one permutation exists
    return best
