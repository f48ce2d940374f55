"""Prompt Router walkthrough.

Shows how the auto-selected model moves with the priority presets,
then runs one prompt per preset on the simulated backend.

Run with:
    python -m examples.router_demo
"""

from config import load_config, dump_settings
from session import ApplyPreset, ClearSelection, RouterSession, SelectModel


if __name__ == "__main__":
    print("Prompt Router Demo\n" + "=" * 50)

    session = RouterSession.from_config(load_config())

    for preset in ("cost", "latency", "quality", "balanced"):
        session.dispatch(ApplyPreset(preset))
        print(f"\nPreset: {preset} ({session.state.weights})")
        for row in session.dashboard():
            marker = "->" if row.auto_selected else "  "
            print(f"  {marker} {row.model.name:<14} score={row.score.combined:.2f} "
                  f"est={row.estimate.latency_ms}ms ${row.estimate.cost}")

        record = session.run_prompt()
        print(f"  Ran on {record.model}: {record.actual_tokens} tokens, ${record.actual_cost}")

    session.dispatch(SelectModel("gpt-high"))
    record = session.run_prompt()
    print(f"\nManual pick: {record.model} (manual={record.selected_manually})")
    session.dispatch(ClearSelection())

    print("\n" + "=" * 50)
    print(f"History: {len(session.state.history)} runs, newest on {session.state.history[0].model}")
    print("Exported settings:")
    print(dump_settings(session.state.rules_name, session.state.weights))
