"""
Generators — derive release-config entries from distributions and prefixes.

Each generator module exposes a plural ``generate_*()`` function that
iterates the distribution list in order, and a singular one that builds
a single entry. All of them are pure: policy and inputs in, frozen
models out.
"""
