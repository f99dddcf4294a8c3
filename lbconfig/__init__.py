"""lbconfig: client-side load-balancing policy selection for service clusters.

A cluster descriptor names its load-balancing policy either through the
extensible, ordered list of typed policy candidates or through the legacy
`lb_policy` enum plus policy-specific sub-messages. lbconfig reconciles both
into one canonical, single-root-key config that policy instantiation consumes.

Core workflows:
- Resolution: walk the candidate list, convert each typed payload, and pick
  the first policy the provider registry knows how to build
- Legacy adaptation: map the enum selector onto the same canonical shape
- Inspection: render resolved configs as JSON or as an indented plan
"""
