from ml_container_creator.main import cli

cli(prog_name="mlcc")
