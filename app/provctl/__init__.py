"""provctl - Declarative workstation provisioning for Windows.

Declare the desired state of a developer machine in a TOML file and
reconcile the machine towards it.
"""

__version__ = "0.3.0"
