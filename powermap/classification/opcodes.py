"""
SASS opcode namespace.

One flat namespace covering every generation the power model supports
(Kepler, Pascal, Volta, Turing, Ampere). A mnemonic denotes the same
instruction on every generation where it appears; which generation
introduced it is recorded in generations.py, not here.
"""

from enum import Enum


class Opcode(str, Enum):
    """SASS instruction mnemonic."""

    # ==================== Single-precision floating point ====================
    FADD = "FADD"
    FADD32I = "FADD32I"
    FCHK = "FCHK"
    FCMP = "FCMP"
    FFMA = "FFMA"
    FFMA32I = "FFMA32I"
    FMNMX = "FMNMX"
    FMUL = "FMUL"
    FMUL32I = "FMUL32I"
    FSEL = "FSEL"
    FSET = "FSET"
    FSETP = "FSETP"
    FSWZ = "FSWZ"
    FSWZADD = "FSWZADD"
    MUFU = "MUFU"            # SIN, COS, EX2, LG2, RSQ, RCP share one opcode
    RRO = "RRO"              # Range reduction ahead of MUFU

    # Half precision (packed)
    HADD2 = "HADD2"
    HADD2_32I = "HADD2_32I"
    HFMA2 = "HFMA2"
    HFMA2_32I = "HFMA2_32I"
    HMNMX2 = "HMNMX2"
    HMUL2 = "HMUL2"
    HMUL2_32I = "HMUL2_32I"
    HSET2 = "HSET2"
    HSETP2 = "HSETP2"

    # ==================== Double precision ====================
    DADD = "DADD"
    DFMA = "DFMA"
    DMNMX = "DMNMX"
    DMUL = "DMUL"
    DSET = "DSET"
    DSETP = "DSETP"

    # ==================== Matrix (tensor core) ====================
    HMMA = "HMMA"
    IMMA = "IMMA"
    BMMA = "BMMA"
    DMMA = "DMMA"

    # ==================== Integer ====================
    BFE = "BFE"
    BFI = "BFI"
    BMSK = "BMSK"
    BREV = "BREV"
    FLO = "FLO"
    IABS = "IABS"
    IADD = "IADD"
    IADD3 = "IADD3"
    IADD32I = "IADD32I"
    ICMP = "ICMP"
    IDP = "IDP"
    IDP4A = "IDP4A"
    IMAD = "IMAD"
    IMADSP = "IMADSP"
    IMNMX = "IMNMX"
    IMUL = "IMUL"
    IMUL32I = "IMUL32I"
    ISAD = "ISAD"
    ISCADD = "ISCADD"
    ISCADD32I = "ISCADD32I"
    ISET = "ISET"
    ISETP = "ISETP"
    ISUB = "ISUB"
    LEA = "LEA"
    LOP = "LOP"
    LOP3 = "LOP3"
    LOP32I = "LOP32I"
    POPC = "POPC"
    REDUX = "REDUX"
    SHF = "SHF"
    SHL = "SHL"
    SHR = "SHR"
    VABSDIFF = "VABSDIFF"
    VABSDIFF4 = "VABSDIFF4"
    VMNMX = "VMNMX"
    XMAD = "XMAD"

    # ==================== Conversion ====================
    F2F = "F2F"
    F2FP = "F2FP"
    F2I = "F2I"
    F2IP = "F2IP"
    FRND = "FRND"
    I2F = "I2F"
    I2FP = "I2FP"
    I2I = "I2I"
    I2IP = "I2IP"

    # ==================== Movement & predicates ====================
    CS2R = "CS2R"
    CSET = "CSET"
    CSETP = "CSETP"
    MOV = "MOV"
    MOV32I = "MOV32I"
    MOVM = "MOVM"
    P2R = "P2R"
    PLOP3 = "PLOP3"
    PRMT = "PRMT"
    PSET = "PSET"
    PSETP = "PSETP"
    R2P = "R2P"
    SEL = "SEL"
    SGXT = "SGXT"
    SHFL = "SHFL"

    # Uniform datapath
    R2UR = "R2UR"
    S2UR = "S2UR"
    UBMSK = "UBMSK"
    UBREV = "UBREV"
    UCLEA = "UCLEA"
    UF2FP = "UF2FP"
    UFLO = "UFLO"
    UIADD3 = "UIADD3"
    UIMAD = "UIMAD"
    UISETP = "UISETP"
    ULDC = "ULDC"
    ULEA = "ULEA"
    ULOP = "ULOP"
    ULOP3 = "ULOP3"
    ULOP32I = "ULOP32I"
    UMOV = "UMOV"
    UP2UR = "UP2UR"
    UPLOP3 = "UPLOP3"
    UPOPC = "UPOPC"
    UPRMT = "UPRMT"
    UPSETP = "UPSETP"
    UR2UP = "UR2UP"
    USEL = "USEL"
    USGXT = "USGXT"
    USHF = "USHF"
    USHL = "USHL"
    USHR = "USHR"
    VOTEU = "VOTEU"

    # ==================== Memory ====================
    LD = "LD"
    LDC = "LDC"
    LDG = "LDG"
    LDGDEPBAR = "LDGDEPBAR"
    LDGSTS = "LDGSTS"
    LDL = "LDL"
    LDS = "LDS"
    LDSLK = "LDSLK"
    LDSM = "LDSM"
    ST = "ST"
    STG = "STG"
    STL = "STL"
    STS = "STS"
    STSCUL = "STSCUL"
    MATCH = "MATCH"
    QSPC = "QSPC"

    # Atomics and reductions
    ATOM = "ATOM"
    ATOMG = "ATOMG"
    ATOMS = "ATOMS"
    RED = "RED"

    # Cache control and memory ordering
    CCTL = "CCTL"
    CCTLL = "CCTLL"
    CCTLT = "CCTLT"
    ERRBAR = "ERRBAR"
    MEMBAR = "MEMBAR"

    # Surface
    SUATOM = "SUATOM"
    SUBFM = "SUBFM"
    SUCLAMP = "SUCLAMP"
    SUEAU = "SUEAU"
    SULD = "SULD"
    SULDGA = "SULDGA"
    SUQUERY = "SUQUERY"
    SURED = "SURED"
    SUST = "SUST"
    SUSTGA = "SUSTGA"

    # ==================== Texture ====================
    TEX = "TEX"
    TEXS = "TEXS"
    TLD = "TLD"
    TLD4 = "TLD4"
    TLD4S = "TLD4S"
    TLDS = "TLDS"
    TMML = "TMML"
    TXD = "TXD"
    TXQ = "TXQ"

    # ==================== Control flow ====================
    BMOV = "BMOV"
    BPT = "BPT"
    BRA = "BRA"
    BREAK = "BREAK"
    BRK = "BRK"
    BRX = "BRX"
    BRXU = "BRXU"
    BSSY = "BSSY"
    BSYNC = "BSYNC"
    CAL = "CAL"
    CALL = "CALL"
    CONT = "CONT"
    EXIT = "EXIT"
    JCAL = "JCAL"
    JMP = "JMP"
    JMX = "JMX"
    JMXU = "JMXU"
    KILL = "KILL"
    NANOSLEEP = "NANOSLEEP"
    PBK = "PBK"
    PCNT = "PCNT"
    PEXIT = "PEXIT"
    PRET = "PRET"
    RET = "RET"
    RPCMOV = "RPCMOV"
    RTT = "RTT"
    SSY = "SSY"
    SYNC = "SYNC"
    WARPSYNC = "WARPSYNC"
    YIELD = "YIELD"

    # ==================== Miscellaneous ====================
    B2R = "B2R"
    BAR = "BAR"
    CSMTEST = "CSMTEST"
    DEPBAR = "DEPBAR"
    GETLMEMBASE = "GETLMEMBASE"
    LEPC = "LEPC"
    NOP = "NOP"
    PMTRIG = "PMTRIG"
    R2B = "R2B"
    S2R = "S2R"
    SETCTAID = "SETCTAID"
    SETLMEMBASE = "SETLMEMBASE"
    VOTE = "VOTE"
    VOTE_VTG = "VOTE_VTG"

    @classmethod
    def from_mnemonic(cls, text: str) -> "Opcode":
        """
        Resolve decoder text to an opcode.

        Accepts the bare mnemonic ("FADD") or one carrying modifiers
        ("FADD.FTZ.RN"); modifiers are dropped. Raises ValueError if the
        base mnemonic is not part of the namespace.
        """
        cleaned = text.strip().upper()
        try:
            return cls(cleaned)
        except ValueError:
            pass

        base = cleaned.split('.', 1)[0]
        try:
            return cls(base)
        except ValueError:
            raise ValueError(f"unknown SASS mnemonic: {text!r}") from None
