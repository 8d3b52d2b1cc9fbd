"""
Example: Commands, derived commands and filtered projections

A Command1 doubles a number, a CommandRef re-runs whenever an input value
changes, and a filtered observable keeps only error messages.
"""

import asyncio

from result_command import (
    Command1,
    CommandRef,
    Failure,
    ObservableValue,
    Success,
    setup_logging,
)


async def double(n: int):
    await asyncio.sleep(0.1)
    if n < 0:
        return Failure(ValueError(f"cannot double {n}"))
    return Success(n * 2)


async def main():
    setup_logging(level="DEBUG", format="detailed")

    # Example 1: plain command with per-state handlers
    print("=== Example 1: Command1 ===")
    doubler = Command1(double, name="Doubler")
    doubler.add_when_listener(
        on_running=lambda: print("running..."),
        on_success=lambda value: print(f"got {value}"),
        on_failure=lambda error: print(f"failed: {error}"),
    )
    await doubler.execute(21)
    await doubler.execute(-1)

    errors = doubler.filter("", lambda state: str(state.error) if state.is_failure else None)
    await doubler.execute(-7)
    print(f"last error: {errors.value!r}\n")

    # Example 2: derived command
    print("=== Example 2: CommandRef ===")
    count = ObservableValue(0)
    doubled = CommandRef(lambda ref: ref(count), double, name="Doubled")
    count.value = 5
    await doubled.wait_for_pending()
    print(f"state: {doubled.state}")
    for entry in doubled.state_history:
        print(f"  {entry}")

    doubled.dispose()


if __name__ == "__main__":
    asyncio.run(main())
