"""
action_universe: fixing and moving substructures of finite monoid/group actions.

Packages:
- act_core: finite actions, canonical ordering, concrete catalog
- act_fixing: fixing submonoids/subgroups, Galois connection, moving subgroups, law checks
"""
