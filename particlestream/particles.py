"""
Use this for particle identification of PDG codes in particle streams

Hadrons, leptons and gauge bosons use the codes of the Particle Data
Group numbering scheme. Nuclei use the 10-digit code::

    10LZZZAAAI

with L the number of strange quarks, Z the charge, A the mass number
and I the isomer level. So to find charged pions:

.. code-block:: python

    from particlestream import particles

    if particles.name(pdg_id) in ['pi_p', 'pi_m']:
        pass

    if particles.is_nucleus(1000060120):
        print('nucleus: %s' % particles.name(1000060120))  # carbon12

"""
import re

NUCLEUS_BASE = 1000000000


def name(pdg_id):
    """Get the name for a PDG particle code

    :param pdg_id: PDG code of the particle.
    :return: name of the particle. For nuclei the mass number is added
             to the name of the element. Unknown codes are returned as
             'pdg_<code>'.

    """
    try:
        return ID[pdg_id]
    except KeyError:
        pass
    if is_nucleus(pdg_id):
        z = charge_number(pdg_id)
        a = mass_number(pdg_id)
        if z in ATOMIC_NUMBER:
            prefix = 'anti_' if pdg_id < 0 else ''
            return '%s%s%d' % (prefix, ATOMIC_NUMBER[z], a)
    return 'pdg_%d' % pdg_id


def pdg_id(name):
    """Get the PDG code for a particle name

    :param name: name of the particle, or of an element with the mass
                 number appended, e.g. 'carbon12'. Without mass number
                 the mass number is taken to be twice the charge.
    :return: PDG code, or None if the name is unknown.

    """
    for pid, particle_name in ID.items():
        if name == particle_name:
            return pid
    match = re.match(r'^pdg_(-?\d+)$', name)
    if match is not None:
        return int(match.group(1))
    sign = 1
    if name.startswith('anti_'):
        sign = -1
        name = name[len('anti_'):]
    atom = re.match(r'^([a-z]+)(\d*)$', name)
    if atom is None:
        return None
    for z, atom_name in ATOMIC_NUMBER.items():
        if atom.group(1) == atom_name:
            a = int(atom.group(2)) if atom.group(2) else 2 * z
            return sign * nucleus_pdg_id(z, a)
    return None


def nucleus_pdg_id(z, a, n_strange=0, isomer=0):
    """PDG code of a nucleus with charge z and mass number a"""

    return (NUCLEUS_BASE + n_strange * 10000000 + z * 10000 + a * 10 +
            isomer)


def is_nucleus(pdg_id):
    return abs(pdg_id) >= NUCLEUS_BASE


def charge_number(pdg_id):
    """Z of a nucleus, -1 for anything else"""

    if not is_nucleus(pdg_id):
        return -1
    return abs(pdg_id) // 10000 % 1000


def mass_number(pdg_id):
    """A of a nucleus, -1 for anything else"""

    if not is_nucleus(pdg_id):
        return -1
    return abs(pdg_id) // 10 % 1000


ID = {22: 'gamma',
      11: 'electron',
      -11: 'positron',
      12: 'electron_neutrino',
      -12: 'anti_electron_neutrino',
      13: 'muon_m',
      -13: 'muon_p',
      14: 'muon_neutrino',
      -14: 'anti_muon_neutrino',

      111: 'pi_0',
      211: 'pi_p',
      -211: 'pi_m',
      221: 'eta',
      331: 'eta_prime',
      113: 'rho_0',
      213: 'rho_p',
      -213: 'rho_m',
      223: 'omega',
      333: 'phi',
      130: 'Kaon_0_long',
      310: 'Kaon_0_short',
      311: 'Kaon_0',
      -311: 'anti_Kaon_0',
      321: 'Kaon_p',
      -321: 'Kaon_m',
      313: 'Kaon_star_0',
      -313: 'anti_Kaon_star_0',
      323: 'Kaon_star_p',
      -323: 'Kaon_star_m',
      421: 'D_0',
      -421: 'anti_D_0',
      411: 'D_p',
      -411: 'D_m',
      443: 'j_psi',

      2212: 'proton',
      -2212: 'anti_proton',
      2112: 'neutron',
      -2112: 'anti_neutron',
      2224: 'Delta_pp',
      2214: 'Delta_p',
      2114: 'Delta_0',
      1114: 'Delta_m',
      -2224: 'anti_Delta_mm',
      -2214: 'anti_Delta_m',
      -2114: 'anti_Delta_0',
      -1114: 'anti_Delta_p',
      3122: 'Lambda',
      -3122: 'anti_Lambda',
      3222: 'Sigma_p',
      3212: 'Sigma_0',
      3112: 'Sigma_m',
      -3222: 'anti_Sigma_m',
      -3212: 'anti_Sigma_0',
      -3112: 'anti_Sigma_p',
      3322: 'Xi_0',
      3312: 'Xi_m',
      -3322: 'anti_Xi_0',
      -3312: 'anti_Xi_p',
      3334: 'Omega_m',
      -3334: 'anti_Omega_p',

      1000010020: 'deuteron',
      1000010030: 'triton',
      1000020030: 'helium3',
      1000020040: 'alpha'}


ATOMIC_NUMBER = {1: 'hydrogen',
                 2: 'helium',
                 3: 'lithium',
                 4: 'beryllium',
                 5: 'boron',
                 6: 'carbon',
                 7: 'nitrogen',
                 8: 'oxygen',
                 9: 'fluorine',
                 10: 'neon',
                 11: 'sodium',
                 12: 'magnesium',
                 13: 'aluminium',
                 14: 'silicon',
                 15: 'phosphorus',
                 16: 'sulfur',
                 17: 'chlorine',
                 18: 'argon',
                 19: 'potassium',
                 20: 'calcium',
                 26: 'iron',
                 28: 'nickel',
                 29: 'copper',
                 40: 'zirconium',
                 44: 'ruthenium',
                 47: 'silver',
                 54: 'xenon',
                 79: 'gold',
                 82: 'lead',
                 92: 'uranium'}
