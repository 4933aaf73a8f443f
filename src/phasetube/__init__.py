"""Real-time 3D tube animation of the FitzHugh-Nagumo phase-space trajectory."""
