from readiness_gate.main import run

run()
