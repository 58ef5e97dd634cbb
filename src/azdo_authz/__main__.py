from azdo_authz.cli import run_entrypoint

run_entrypoint()
