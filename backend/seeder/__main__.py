from seeder.main import run

run()
