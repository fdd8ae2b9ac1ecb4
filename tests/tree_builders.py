"""Build molgeom parse trees for test molecules.

A reader for the SMILES subset the tests need: organic and bracket atoms,
bonds, branches and ring bond digits. Nothing here validates chemistry.
"""

# Local repo modules
import conftest


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import atom as atom_module
from molgeom import parse_tree


BOND_CHARS = ".-/\\=#$"
ORGANIC_TWO_LETTER = ("Cl", "Br")


#============================================
class _Reader(object):
	def __init__(self, text):
		self.text = text
		self.pos = 0

	def peek(self, offset=0):
		index = self.pos + offset
		if index < len(self.text):
			return self.text[index]
		return ""

	def take(self, count=1):
		chunk = self.text[self.pos:self.pos + count]
		self.pos += count
		return chunk

	def expect(self, char):
		if self.peek() != char:
			raise ValueError("expected %r at %d in %r" % (char, self.pos, self.text))
		self.pos += 1


#============================================
def smiles_tree(text):
	"""Return the ParseNode tree for a SMILES string."""
	reader = _Reader(text)
	node = _chain(reader)
	if reader.pos != len(text):
		raise ValueError("trailing input at %d in %r" % (reader.pos, text))
	return node


#============================================
def _read_int(reader):
	digits = ""
	while reader.peek().isdigit():
		digits += reader.take()
	if not digits:
		return None
	return int(digits)


#============================================
def _ring_label(reader):
	if reader.peek() == "%":
		reader.take()
		return int(reader.take(2))
	return int(reader.take())


#============================================
def _is_ring_label(char):
	return char.isdigit() or char == "%"


#============================================
def _chain(reader):
	node = parse_tree.ParseNode(atom=_atom(reader))
	while True:
		if _is_ring_label(reader.peek()):
			node.ringbonds.append(parse_tree.RingBond(id=_ring_label(reader)))
		elif reader.peek() in BOND_CHARS and reader.peek() and _is_ring_label(reader.peek(1)):
			bond = reader.take()
			node.ringbonds.append(parse_tree.RingBond(id=_ring_label(reader), bond=bond))
		else:
			break
	while reader.peek() == "(":
		reader.take()
		branch_bond = None
		if reader.peek() and reader.peek() in BOND_CHARS:
			branch_bond = reader.take()
		branch = _chain(reader)
		branch.branch_bond = branch_bond
		reader.expect(")")
		node.branches.append(branch)
	if reader.peek() and reader.peek() in BOND_CHARS:
		node.bond = reader.take()
	if reader.peek() and reader.peek() != ")":
		node.next = _chain(reader)
	return node


#============================================
def _atom(reader):
	if reader.peek() == "[":
		return _bracket_atom(reader)
	two = reader.text[reader.pos:reader.pos + 2]
	if two in ORGANIC_TWO_LETTER:
		return reader.take(2)
	char = reader.take()
	if not char.isalpha():
		raise ValueError("expected an atom at %d in %r" % (reader.pos - 1, reader.text))
	return char


#============================================
def _bracket_atom(reader):
	reader.expect("[")
	isotope = _read_int(reader)
	two = reader.text[reader.pos:reader.pos + 2]
	if len(two) == 2 and two[1].islower() and atom_module.normalize_element(two) in atom_module.ATOMIC_NUMBERS:
		element = reader.take(2)
	else:
		element = reader.take()
	chirality = None
	if reader.peek() == "@":
		chirality = reader.take()
		if reader.peek() == "@":
			chirality += reader.take()
	hcount = None
	if reader.peek() == "H":
		reader.take()
		hcount = _read_int(reader)
		if hcount is None:
			hcount = 1
	charge = 0
	while reader.peek() in ("+", "-") and reader.peek():
		sign = 1 if reader.take() == "+" else -1
		amount = _read_int(reader)
		charge += sign * (amount if amount is not None else 1)
	atom_class = None
	if reader.peek() == ":":
		reader.take()
		atom_class = _read_int(reader)
	reader.expect("]")
	return parse_tree.BracketAtom(
		element=element,
		charge=charge,
		isotope=isotope,
		hcount=hcount,
		chirality=chirality,
		atom_class=atom_class,
	)


#============================================
def ethene():
	return parse_tree.ParseNode(atom="C", bond="=", next=parse_tree.ParseNode(atom="C"))


#============================================
def benzene():
	last = parse_tree.ParseNode(atom="c", ringbonds=[parse_tree.RingBond(id=1)])
	node = last
	for _ in range(4):
		node = parse_tree.ParseNode(atom="c", next=node)
	return parse_tree.ParseNode(atom="c", ringbonds=[parse_tree.RingBond(id=1)], next=node)
