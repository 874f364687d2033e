"""Business logic services. Import the submodules directly."""
