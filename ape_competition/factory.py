from .modules import ModuleBuilder, build_module

CONTRACT_NAME = "CompetitionFactory"
DEPRECATED_ALIASES = ("Factory",)


def _competition_factory(m: ModuleBuilder):
    deployer = m.get_account(0)
    factory = m.contract(CONTRACT_NAME, [deployer])
    return {"factory": factory}


CompetitionFactoryModule = build_module("CompetitionFactoryModule", _competition_factory)
