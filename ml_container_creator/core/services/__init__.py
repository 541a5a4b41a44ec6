"""
Engine services — catalog, resolver, sequencer, validation, planning,
rendering and materialization.

None of these modules touch the terminal; interactive input arrives
through the ``Prompter`` protocol defined in ``sequencer``.
"""
